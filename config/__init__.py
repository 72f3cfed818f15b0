"""Environment-driven configuration"""
