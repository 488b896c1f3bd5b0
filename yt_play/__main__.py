from yt_play.cli import app

app(prog_name="yt-play")
