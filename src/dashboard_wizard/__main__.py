from .cli import app

app(prog_name="dashboard-wizard")
