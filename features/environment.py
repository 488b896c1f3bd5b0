import shutil
import tempfile
from pathlib import Path


def before_scenario(context, scenario):
    context.cache_dir = Path(tempfile.mkdtemp(prefix="yt-play-"))


def after_scenario(context, scenario):
    shutil.rmtree(context.cache_dir, ignore_errors=True)
