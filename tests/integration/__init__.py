"""Integration tests that drive the installed CLI in subprocesses."""
