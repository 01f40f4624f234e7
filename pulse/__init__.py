"""Pulse: self-hosted web analytics with session reconstruction."""
