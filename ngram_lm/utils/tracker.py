import time
from functools import wraps
from ngram_lm.utils.debugg_utils import Colors


def track(method=None, label=None):
    """
    Times a method call and prints the duration.

    When the instance keeps a `step_times` dict the duration is also stored
    there under `label` (the method name by default), next to the steps a
    ResourceTracker records.
    """

    def deco(f):
        step = label or f.__name__

        @wraps(f)
        def wrapper(self, *args, **kwargs):
            start = time.perf_counter()
            result = f(self, *args, **kwargs)
            duration = time.perf_counter() - start
            step_times = getattr(self, "step_times", None)
            if step_times is not None:
                step_times[step] = duration
            print(f"{Colors.BOLD}{step}{Colors.ENDC} {Colors.OKGREEN}[DONE]{Colors.ENDC} {duration:.2f}s")
            return result

        return wrapper

    return deco(method) if method is not None else deco
