import io
from pathlib import Path
from rich.console import Console
from mediaswap.infrastructure.event_bus import EventBus
from mediaswap.ui.reporter import ConsoleReporter
from mediaswap.domain.events import DiscoveryFinished, JobFailed, JobSwapped
from mediaswap.domain.models import FailureKind, JobStatus, SwapFailure, SwapResult

def _reporter():
    bus = EventBus()
    buf = io.StringIO()
    console = Console(file=buf, markup=False, highlight=False, emoji=False, soft_wrap=True, width=40)
    ConsoleReporter(bus, console=console)
    return bus, buf

def test_reporter_prints_header(tmp_path):
    bus, buf = _reporter()

    bus.publish(DiscoveryFinished(source=tmp_path, files_to_process=4, videos=2, audios=2))

    assert buf.getvalue() == "Swapping 4 videos:\n"

def test_reporter_prints_swapped_and_failed(make_job):
    bus, buf = _reporter()
    ok = SwapResult(job=make_job("film.mkv"), status=JobStatus.COMPLETED)
    failure = SwapFailure(kind=FailureKind.DESTINATION_EXISTS, message="mp4 file already exists")
    failed = SwapResult(job=make_job("show.mkv"), status=JobStatus.FAILED, failure=failure)

    bus.publish(JobSwapped(result=ok))
    bus.publish(JobFailed(result=failed, error_message=failure.message))

    assert buf.getvalue().splitlines() == [
        " - Swapped: /media/film.mkv",
        " - Failed: /media/show.mkv: mp4 file already exists",
    ]

def test_reporter_prints_brackets_verbatim_without_wrapping(make_job):
    bus, buf = _reporter()
    long_name = "[y/N] " + "very_long_name_" * 6 + ".mkv"
    result = SwapResult(job=make_job(long_name), status=JobStatus.COMPLETED)

    bus.publish(JobSwapped(result=result))

    assert buf.getvalue() == f" - Swapped: {Path('/media') / long_name}\n"
