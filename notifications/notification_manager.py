"""Notification centre for vehicle alerts and infotainment messages"""
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Deque, List, Optional

logger = logging.getLogger(__name__)


class AlertLevel(Enum):
    """Notification severity"""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


_LEVEL_ICONS = {
    AlertLevel.INFO: "ℹ️ ",
    AlertLevel.WARNING: "⚠️ ",
    AlertLevel.CRITICAL: "🚨",
}


@dataclass
class Notification:
    """Single entry in the notification log"""
    message: str
    level: AlertLevel
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self):
        return {
            'message': self.message,
            'level': self.level.name,
            'timestamp': self.timestamp.isoformat()
        }


def sanitize_message(message: str) -> str:
    """Strip control characters except tab and newline"""
    return ''.join(c for c in message if ord(c) >= 32 or c in '\t\n')


class NotificationSink(ABC):
    """Receiver for subsystem notifications"""

    @abstractmethod
    def notify(self, message: str, level: AlertLevel):
        """Record a message at the given severity"""
        pass


class NotificationManager(NotificationSink):
    """
    Central notification log
    Every subsystem reports through notify(); warnings and critical alerts
    are surfaced immediately, everything is kept for the notification centre.
    """

    def __init__(self, sound_enabled: bool = True, max_history: int = 500):
        """
        Initialize notification manager

        Args:
            sound_enabled: Emit an audible alert line with critical notifications
            max_history: Maximum notifications kept, oldest dropped first
        """
        self._notifications: Deque[Notification] = deque(maxlen=max_history)
        self._sound_enabled = sound_enabled

    def notify(self, message: str, level: AlertLevel):
        """Record a notification"""
        clean = sanitize_message(message)
        self._notifications.append(Notification(clean, level))

        if level == AlertLevel.CRITICAL:
            logger.critical(f"🚨 CRITICAL ALERT: {clean}")
            if self._sound_enabled:
                logger.critical("🔊 *BEEP BEEP BEEP*")
        elif level == AlertLevel.WARNING:
            logger.warning(f"⚠️  WARNING: {clean}")
        else:
            logger.info(clean)

    def get_notifications(self, level: Optional[AlertLevel] = None) -> List[Notification]:
        """Get logged notifications, oldest first"""
        if level is None:
            return list(self._notifications)
        return [n for n in self._notifications if n.level == level]

    def get_notification_count(self, level: Optional[AlertLevel] = None) -> int:
        if level is None:
            return len(self._notifications)
        return sum(1 for n in self._notifications if n.level == level)

    def has_critical_alerts(self) -> bool:
        return any(n.level == AlertLevel.CRITICAL for n in self._notifications)

    def clear_notifications(self):
        count = len(self._notifications)
        self._notifications.clear()
        logger.info(f"🗑️  Cleared {count} notification(s)")

    def set_sound_enabled(self, enabled: bool):
        self._sound_enabled = enabled
        logger.info(f"🔊 Notification sounds {'enabled' if enabled else 'disabled'}")

    def is_sound_enabled(self) -> bool:
        return self._sound_enabled

    def format_notifications(self) -> List[str]:
        """
        Format the log for the notification centre screen

        Returns:
            One line per notification: "[HH:MM:SS] <icon> LEVEL: message"
        """
        if not self._notifications:
            return ["📋 No notifications."]

        lines = ["📋 === NOTIFICATION CENTER ===", "-" * 40]
        for n in self._notifications:
            lines.append(f"[{n.timestamp.strftime('%H:%M:%S')}] {_LEVEL_ICONS[n.level]} "
                         f"{n.level.name}: {n.message}")
        lines.append("-" * 40)
        return lines
