from json2struct.cli import app

app(prog_name="json2struct")
