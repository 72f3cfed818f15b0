"""GPS sensor feeds"""
