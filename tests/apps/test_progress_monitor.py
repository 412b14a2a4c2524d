import io

from lexis.apps.progress_monitor import ProgressMonitor, main
from lexis.bus import Publisher
from lexis.data.progress import Progress
from lexis.serialization import encode_envelope


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_monitor(max_age=60):
    out = io.StringIO()
    clock = FakeClock()
    return ProgressMonitor(out, max_age=max_age, clock=clock), out, clock


def test_single_operation_on_one_line():
    monitor, out, _ = make_monitor()
    Publisher().publish(Progress("loading", amount=0.25))
    monitor.update()
    Publisher().publish(Progress("loading", amount=0.5))
    monitor.update()
    assert out.getvalue() == "\rloading: 25% \rloading: 50% "


def test_several_operations_one_per_line():
    monitor, out, _ = make_monitor()
    Publisher().publish(Progress("b", amount=0.5))
    Publisher().publish(Progress("a", amount=0.1))
    monitor.update()
    assert out.getvalue() == "\na: 10%\nb: 50%\n"


def test_finished_operations_are_dropped():
    monitor, out, _ = make_monitor()
    Publisher().publish(Progress("loading", amount=1.0))
    monitor.update()
    assert monitor.operations == {}
    assert out.getvalue() == ""


def test_stale_operations_expire():
    monitor, _, clock = make_monitor(max_age=10)
    Publisher().publish(Progress("old", amount=0.2))
    clock.now = 5.0
    Publisher().publish(Progress("new", amount=0.2))
    clock.now = 12.0
    monitor.expire()
    assert list(monitor.operations) == ["new"]


def test_close_stops_listening():
    monitor, _, _ = make_monitor()
    monitor.close()
    Publisher().publish(Progress("loading", amount=0.5))
    assert monitor.operations == {}


def test_run_reads_envelopes():
    monitor, out, _ = make_monitor()
    stream = io.StringIO(
        encode_envelope(Progress("render", amount=0.3)) + "\n"
        + encode_envelope(Progress("render", amount=0.6)) + "\n"
    )
    monitor.run(stream)
    assert out.getvalue() == "\rrender: 30% \rrender: 60% \n"


def test_main():
    stdin = io.StringIO(encode_envelope(Progress("io", amount=0.75)) + "\n")
    out = io.StringIO()
    assert main([], stdin=stdin, stdout=out) == 0
    assert "io: 75%" in out.getvalue()
