import threading
from collections import namedtuple


scputimes = namedtuple(
    "scputimes",
    "user nice system idle iowait irq softirq steal guest guest_nice",
)
svmem = namedtuple("svmem", "total available percent used free")
snetio = namedtuple("snetio", "bytes_sent bytes_recv packets_sent packets_recv errin errout dropin dropout")


def cpu(user=0.0, idle=0.0, system=0.0, iowait=0.0, guest=0.0):
    return scputimes(user, 0.0, system, idle, iowait, 0.0, 0.0, 0.0, guest, 0.0)


def mem(used, total):
    return svmem(total, total - used, 0.0, used, total - used)


def nic(recv, sent):
    return snetio(sent, recv, 0, 0, 0, 0, 0, 0)


class FakeClock:
    """Returns queued timestamps, then keeps stepping by ``step``."""

    def __init__(self, *times, step=1.0):
        self._times = list(times)
        self._step = step
        self._now = 0.0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            if self._times:
                self._now = self._times.pop(0)
            else:
                self._now += self._step
            return self._now


