"""Test package for the typespeed typing test.

The core tests drive the session headlessly with a fake clock; the smoke
test runs the pygame shell with SDL's dummy video driver so no real window
opens.  Run ``pytest`` from the project root.
"""
