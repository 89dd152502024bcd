import time
import os
import platform
import psutil


class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"
    UNDERLINE = "\033[4m"


def get_proc_mem_mb():
    """
    Returns (rss_mb, uss_mb_or_None) for the current Python process.
    - RSS: resident set size (what the OS keeps in RAM for this process)
    - USS: unique set size (memory private to this process) if available
    """
    p = psutil.Process(os.getpid())
    try:
        m = p.memory_full_info()  # may include 'uss' on many platforms
    except psutil.AccessDenied:
        m = p.memory_info()
    rss_mb = m.rss / (1024**2)
    uss = getattr(m, "uss", None)
    uss_mb = (uss / (1024**2)) if uss is not None else None
    return rss_mb, uss_mb


def print_mem_line(prefix=""):
    """
    Pretty one-liner you can call anywhere.
    Example: print_mem_line(prefix="[after load]")
    """
    rss_mb, uss_mb = get_proc_mem_mb()
    parts = [prefix.strip(), f"RSS {rss_mb:.2f}MB"]
    if uss_mb is not None:
        parts.append(f"USS {uss_mb:.2f}MB")
    print(" | ".join(p for p in parts if p))


def get_disk_usage():
    current_os = platform.system().lower()
    if current_os == "windows":
        path = os.getenv("SystemDrive", "C:") + "\\"
    elif current_os == "linux" and os.path.exists("/kaggle/working"):
        path = "/kaggle/working"
    elif current_os == "linux" and os.path.exists("/content"):
        path = "/content"
    else:
        path = "/"
    return psutil.disk_usage(path).percent


class ResourceTracker:
    """Prints duration, RAM, CPU and disk usage between named steps."""

    def __init__(self, enabled=True):
        self.enabled = enabled
        self._last_step_time = time.time()
        self.step_times = {}

    def step(self, step_name):
        if not self.enabled:
            return None
        now = time.time()
        step_duration = now - self._last_step_time
        self._last_step_time = now

        ram_used = psutil.virtual_memory().used / 1024**2
        cpu_p = psutil.cpu_percent()
        disk_usage = get_disk_usage()

        print(
            f"{Colors.OKCYAN}[DEBUG]{Colors.ENDC} Step: {step_name:>25} || Duration: {step_duration:>8.2f}s || "
            f"RAM: {ram_used:>8.2f}MB || CPU: {cpu_p:>6.2f}% || Disk: {disk_usage}%"
        )
        self.step_times[step_name] = step_duration
        return step_duration
