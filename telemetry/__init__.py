"""Navigation telemetry"""
