from frontend_buildpack.cli import app

app(prog_name="frontend-buildpack")
