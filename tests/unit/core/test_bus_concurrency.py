import threading
from concurrent.futures import ThreadPoolExecutor

from magicbus.core.bus import MagicBus
from magicbus.core.mailboxes import discard


class RightType:
    pass


class Counting:
    def __init__(self) -> None:
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, msg) -> None:
        with self._lock:
            self.calls += 1


def test_unsubscribes_thread_safely(bus, recorder):
    start = threading.Barrier(100, timeout=10)
    mailboxes = [Counting() for _ in range(100)]

    def cycle(mailbox):
        start.wait()
        bus.subscribe(RightType, mailbox)
        bus.unsubscribe(RightType, mailbox)

    with ThreadPoolExecutor(max_workers=100) as pool:
        list(pool.map(cycle, mailboxes))

    message = RightType()
    bus.post(message)

    assert sum(m.calls for m in mailboxes) == 0
    assert [r.message for r in recorder.returned] == [message]
    assert recorder.failed == []


def test_concurrent_subscribes_all_land_once(bus, recorder):
    mailboxes = [Counting() for _ in range(50)]

    def subscribe_twice(mailbox):
        bus.subscribe(RightType, mailbox)
        bus.subscribe(RightType, mailbox)

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(subscribe_twice, mailboxes))

    bus.post(RightType())

    assert [m.calls for m in mailboxes] == [1] * 50
    assert recorder.returned == []


def test_posts_while_subscriptions_change(recorder):
    bus = MagicBus(recorder.returned.append, recorder.failed.append)
    steady = Counting()
    bus.subscribe(RightType, steady)
    stop = threading.Event()

    def churn():
        while not stop.is_set():
            mailbox = discard(RightType)
            bus.subscribe(RightType, mailbox)
            bus.unsubscribe(RightType, mailbox)

    def post_many():
        for _ in range(500):
            bus.post(RightType())

    churners = [threading.Thread(target=churn) for _ in range(4)]
    for t in churners:
        t.start()
    try:
        with ThreadPoolExecutor(max_workers=4) as pool:
            for f in [pool.submit(post_many) for _ in range(4)]:
                f.result()
    finally:
        stop.set()
        for t in churners:
            t.join()

    # steady was a member for every snapshot: exactly one delivery per post
    assert steady.calls == 2000
    assert recorder.returned == []
    assert recorder.failed == []
