"""Core interfaces.

Why:
- Define contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions, tests on fakes.
"""
