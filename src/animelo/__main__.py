from animelo.cli import app

app()
