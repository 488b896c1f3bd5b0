from unittest.mock import MagicMock

from behave import given, then, when
from pymonad.either import Right

from yt_play.domain.models import PlaylistEntry
from yt_play.domain.reconcile import reconcile


def _split(names):
    return [name.strip() for name in names.split(",") if name.strip()]


@given('a playlist with entries "{ids}"')
def step_playlist(context, ids):
    context.entries = [PlaylistEntry(id=entry_id, title=f"{entry_id} title") for entry_id in _split(ids)]


@given('a playlist with entries ""')
def step_empty_playlist(context):
    context.entries = []


@given('a cache directory containing "{names}"')
def step_cache_content(context, names):
    for name in _split(names):
        (context.cache_dir / name).write_bytes(b"audio")


def _reconcile(context):
    if not hasattr(context, "fetcher"):
        context.fetcher = MagicMock()
        context.fetcher.download_entries.side_effect = lambda entries, destination, extra="": Right(len(entries))
    context.result = reconcile(context.entries, context.cache_dir, context.fetcher)


@when("the cache is reconciled")
def step_reconcile(context):
    _reconcile(context)


@when("the cache is reconciled twice")
def step_reconcile_twice(context):
    _reconcile(context)
    _reconcile(context)


@then('the cache directory contains "{names}"')
def step_cache_contains(context, names):
    actual = sorted(path.name for path in context.cache_dir.iterdir())
    assert actual == sorted(_split(names)), f"Unexpected cache content: {actual}"


@then("the cache directory is empty")
def step_cache_empty(context):
    assert list(context.cache_dir.iterdir()) == []


@then('the downloader was asked for "{ids}"')
def step_downloaded(context, ids):
    context.fetcher.download_entries.assert_called_once()
    entries = context.fetcher.download_entries.call_args[0][0]
    assert [entry.id for entry in entries] == _split(ids)


@then("the downloader was not called")
def step_not_downloaded(context):
    context.fetcher.download_entries.assert_not_called()
