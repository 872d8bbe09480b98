from stream_parser.cli import app

app(prog_name="mc-stream-parser")
