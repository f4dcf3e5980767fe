from deploynote.cli import app

app()
