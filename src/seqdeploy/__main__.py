from seqdeploy.cli.main import app

app(prog_name="seqdeploy")
