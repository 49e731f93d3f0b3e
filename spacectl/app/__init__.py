"""Application layer for the command-line tool.

``main`` parses flags and settings, ``Runner`` wires the adapters into the
use cases and drives one invocation against the master.
"""
