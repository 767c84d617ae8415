from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Tuple


class Action(str, Enum):
    ACKNOWLEDGE = "acknowledge"
    NAVIGATE_LOGIN = "navigate_login"
    NAVIGATE_ORDER_HISTORY = "navigate_order_history"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Button:
    label: str
    action: Action = Action.ACKNOWLEDGE


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    message: str
    icon: str = ""
    buttons: Tuple[Button, ...] = field(default_factory=tuple)


class NotificationSurface(Protocol):
    def show(self, notification: Notification) -> None:
        ...
