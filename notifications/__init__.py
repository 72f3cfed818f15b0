"""Notification centre shared by the dashboard subsystems"""
from .notification_manager import AlertLevel, Notification, NotificationManager, NotificationSink

__all__ = ['AlertLevel', 'Notification', 'NotificationManager', 'NotificationSink']
