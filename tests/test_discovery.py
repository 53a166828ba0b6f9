import asyncio
import time
from pathlib import Path

import pytest

from typed_scss.discovery import ChangeStream, expand


def _pattern(root: Path, pattern: str = "**/[^_]*.scss") -> str:
    return f"{root.as_posix()}/{pattern}"


def test_expand_skips_partials(tmp_path: Path):
    (tmp_path / "a.scss").write_text(".a { }")
    (tmp_path / "_partial.scss").write_text(".p { }")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "b.scss").write_text(".b { }")

    assert expand(_pattern(tmp_path)) == [
        (tmp_path / "a.scss").as_posix(),
        (nested / "b.scss").as_posix(),
    ]


def test_expand_honours_ignore_pattern(tmp_path: Path):
    (tmp_path / "a.scss").write_text(".a { }")
    vendor = tmp_path / "vendor"
    vendor.mkdir()
    (vendor / "lib.scss").write_text(".lib { }")

    assert expand(_pattern(tmp_path), ignore="**/vendor/**") == [(tmp_path / "a.scss").as_posix()]


def test_poll_reports_add_change_and_unlink(tmp_path: Path):
    source = tmp_path / "a.scss"
    source.write_text(".a { }")
    stream = ChangeStream(_pattern(tmp_path))

    assert stream.poll() == [("add", source.as_posix())]
    assert stream.poll() == []

    source.write_text(".a { color: red; }")
    assert stream.poll() == [("change", source.as_posix())]

    source.unlink()
    assert stream.poll() == [("unlink", source.as_posix())]


def test_on_rejects_unknown_events(tmp_path: Path):
    with pytest.raises(ValueError):
        ChangeStream(_pattern(tmp_path)).on("rename", lambda path: None)


def test_run_dispatches_and_stops(tmp_path: Path):
    source = tmp_path / "a.scss"
    source.write_text(".a { }")
    seen = []

    async def scenario():
        stop = asyncio.Event()
        stream = ChangeStream(_pattern(tmp_path), interval=0.01)

        async def on_add(path):
            seen.append(path)
            stop.set()

        stream.on("add", on_add)
        await asyncio.wait_for(stream.run(stop), timeout=5)

    asyncio.run(scenario())
    assert seen == [source.as_posix()]


def test_close_stops_a_running_stream(tmp_path: Path):
    async def scenario():
        stream = ChangeStream(_pattern(tmp_path), interval=0.01)
        task = asyncio.ensure_future(stream.run())
        await asyncio.sleep(0.05)
        stream.close()
        await asyncio.wait_for(task, timeout=5)

    asyncio.run(scenario())


def test_ignore_globstar_matches_top_level_directories(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.scss").write_text(".a { }")
    (tmp_path / "vendor").mkdir()
    (tmp_path / "vendor" / "lib.scss").write_text(".lib { }")
    (tmp_path / "src" / "vendor").mkdir(parents=True)
    (tmp_path / "src" / "vendor" / "deep.scss").write_text(".deep { }")

    assert expand("**/[^_]*.scss", ignore="**/vendor/**") == ["a.scss"]


def test_run_keeps_the_loop_free_while_polling(tmp_path: Path):
    ticks = []
    polls = []

    async def scenario():
        stop = asyncio.Event()
        stream = ChangeStream(_pattern(tmp_path), interval=0.01)

        def slow_poll():
            before = len(ticks)
            time.sleep(0.2)
            polls.append((before, len(ticks)))
            return []

        stream.poll = slow_poll

        async def ticker():
            while not stop.is_set():
                ticks.append(1)
                await asyncio.sleep(0.01)

        run_task = asyncio.ensure_future(stream.run(stop))
        tick_task = asyncio.ensure_future(ticker())
        while not polls:
            await asyncio.sleep(0.01)
        stop.set()
        await asyncio.wait_for(asyncio.gather(run_task, tick_task), timeout=5)

    asyncio.run(scenario())
    before, after = polls[0]
    assert after > before
