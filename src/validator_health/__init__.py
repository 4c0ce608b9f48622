"""
Validator health monitor package.

Checks how far a validator node's finalized head trails its latest block
and reports the result to a dead-man's-switch monitoring service.
"""

__version__ = "2.0.0"
