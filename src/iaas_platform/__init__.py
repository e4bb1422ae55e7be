"""
IaaS Platform - Server and disk provisioning core

A single-process provisioning service demonstrating hexagonal
architecture: a pure domain model, use-case orchestration behind ports,
and a crash-safe, concurrency-safe JSON file store.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
