"""Per-view fetch generations for stale-response suppression."""


class FetchGeneration:
    """Identifies the latest fetch of one view instance.

    Every fetch takes a token from ``begin``; its result may only be applied
    while ``is_current(token)`` holds. Starting a newer fetch, invalidating,
    or closing the view makes all outstanding tokens stale.
    """

    def __init__(self) -> None:
        self._current = 0
        self.live = True

    def begin(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return self.live and token == self._current

    def invalidate(self) -> None:
        self._current += 1

    def close(self) -> None:
        self.live = False
        self._current += 1
