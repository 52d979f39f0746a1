"""Core contracts.

Operations implement `core.interfaces.operation.Operation`; the orchestrator
only depends on that protocol.
"""
