"""Adapters: infrastructure details (subprocess, Stellar CLI, RPC, JSON files).

The core only knows the domain models and the `CommandRunner` contract.
"""
