import time
import typing as ty


def expo(length: int = -1, y: float = 1.0,) -> ty.Iterator[float]:
    """Ends iteration after 'length'.

    If you want infinite exponential values, pass a negative number for 'length'.
    """
    count = 0
    while length < 0 or count < length:
        yield 2 ** count * y
        count += 1


def sleep_join(
    seconds_iter: ty.Iterable[float], sleep: ty.Callable[[float], ty.Any] = time.sleep
) -> ty.Iterator:
    """A common base strategy for separating retries by sleeps.

    Yields immediately once, then once after each sleep.
    """
    yield
    for secs in seconds_iter:
        sleep(secs)
        yield


Req = ty.TypeVar("Req")
Res = ty.TypeVar("Res")


def resubmit_while_incomplete(
    send: ty.Callable[[Req], ty.Tuple[ty.List[Res], ty.Optional[Req]]],
    request: Req,
    retries: int = 0,
    base_seconds: float = 0.05,
) -> ty.Tuple[ty.List[Res], ty.Optional[Req]]:
    """For APIs that hand back the part of your request they didn't get to.

    `send` returns what it completed plus the leftover request, if
    any. The leftover is resubmitted up to `retries` times with
    exponential sleeps in between. Whatever is still left over after
    that is returned alongside everything that was completed; nothing
    is ever dropped.
    """
    completed: ty.List[Res] = list()
    remaining: ty.Optional[Req] = request
    for _ in sleep_join(expo(retries, base_seconds), sleep=time.sleep):
        done, remaining = send(ty.cast(Req, remaining))
        completed.extend(done)
        if not remaining:
            return completed, None
    return completed, remaining
