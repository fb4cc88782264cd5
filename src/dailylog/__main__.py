from dailylog.cli import app

app(prog_name="dailylog")
