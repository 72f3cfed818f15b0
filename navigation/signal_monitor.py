"""GPS signal quality monitor with edge-triggered notifications"""
import logging
import math

from .core.data_types import SignalState
from .core.interfaces import NotificationSink
from notifications.notification_manager import AlertLevel

logger = logging.getLogger(__name__)


class SignalQualityMonitor:
    """
    Evaluates satellite count and accuracy against fixed thresholds
    Notifies only when availability changes between updates.
    """

    MIN_SATELLITES = 4
    MAX_ACCURACY_M = 10.0  # accuracy must be at or below this

    def __init__(self,
                 notifier: NotificationSink,
                 min_satellites: int = MIN_SATELLITES,
                 max_accuracy_m: float = MAX_ACCURACY_M,
                 satellites: int = 8,
                 accuracy_m: float = 3.0):
        """
        Initialize signal monitor

        Args:
            notifier: Notification sink for lost/restored alerts
            min_satellites: Minimum satellites for a usable fix
            max_accuracy_m: Worst acceptable accuracy in meters
            satellites: Initial satellite count
            accuracy_m: Initial accuracy in meters
        """
        self._notifier = notifier
        self.min_satellites = min_satellites
        self.max_accuracy_m = max_accuracy_m
        self._satellites = max(0, int(satellites))
        self._accuracy = max(0.0, float(accuracy_m))
        self._available = self._evaluate(self._satellites, self._accuracy)

    @property
    def satellite_count(self) -> int:
        return self._satellites

    @property
    def accuracy(self) -> float:
        return self._accuracy

    @property
    def available(self) -> bool:
        return self._available

    def state(self) -> SignalState:
        return SignalState(self._satellites, self._accuracy, self._available)

    def _evaluate(self, satellites: int, accuracy: float) -> bool:
        return satellites >= self.min_satellites and accuracy <= self.max_accuracy_m

    def update(self, satellites: int, accuracy: float) -> SignalState:
        """
        Update signal readings and re-evaluate availability

        Negative readings are clamped to zero rather than rejected.

        Args:
            satellites: Number of visible satellites
            accuracy: Horizontal accuracy in meters

        Returns:
            SignalState with lost/restored set on an availability edge
        """
        if isinstance(satellites, float) and not math.isfinite(satellites):
            satellites = 0
        if isinstance(accuracy, float) and math.isnan(accuracy):
            accuracy = math.inf
        self._satellites = max(0, int(satellites))
        self._accuracy = max(0.0, float(accuracy))

        previous = self._available
        self._available = self._evaluate(self._satellites, self._accuracy)
        logger.debug(f"GPS signal: {self._satellites} sats, {self._accuracy:.1f}m, "
                     f"available={self._available}")

        lost = previous and not self._available
        restored = not previous and self._available
        if lost:
            self._notifier.notify("GPS signal lost!", AlertLevel.CRITICAL)
        elif restored:
            self._notifier.notify("GPS signal restored", AlertLevel.INFO)

        return SignalState(self._satellites, self._accuracy, self._available,
                           lost=lost, restored=restored)
