from .setting import Setting
from .work_log import WorkLog

__all__ = ["WorkLog", "Setting"]
