# host.testing package
# src/host/testing/__init__.py
"""Synthetic hosts for tests and demos."""

from .fakes import FULL_CUBE, HostBuilder, all_faces_sturdy

__all__ = ["FULL_CUBE", "HostBuilder", "all_faces_sturdy"]
