from dynaccess.utils.retry import expo, resubmit_while_incomplete, sleep_join


def test_expo():
    assert list(expo(4, 0.5)) == [0.5, 1.0, 2.0, 4.0]


def test_sleep_join_sleeps_between():
    slept = list()
    assert len(list(sleep_join([1, 2], sleep=slept.append))) == 3
    assert slept == [1, 2]


def _half_at_a_time(request):
    half = len(request) // 2
    return request[half:], request[:half] or None


def test_resubmits_until_done(monkeypatch):
    slept = list()
    monkeypatch.setattr("time.sleep", slept.append)

    done, remaining = resubmit_while_incomplete(_half_at_a_time, [1, 2, 3, 4], retries=5)

    assert sorted(done) == [1, 2, 3, 4]
    assert remaining is None
    assert slept == [0.05, 0.1]


def test_hands_back_what_is_left(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda s: None)

    done, remaining = resubmit_while_incomplete(_half_at_a_time, [1, 2, 3, 4], retries=1)

    assert sorted(done) == [2, 3, 4]
    assert remaining == [1]


def test_no_retries_means_one_attempt():
    calls = list()

    def never_done(request):
        calls.append(request)
        return [], request

    assert resubmit_while_incomplete(never_done, ["x"]) == ([], ["x"])
    assert calls == [["x"]]
