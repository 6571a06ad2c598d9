from emoji_picker.cli.cli import run

run()
