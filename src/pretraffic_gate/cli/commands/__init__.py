# src/pretraffic_gate/cli/commands/__init__.py
# CLI command implementations for ptgate.
