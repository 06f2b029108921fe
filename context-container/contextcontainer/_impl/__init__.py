"""Private implementation of the context container.

This package contains internal, unstable APIs. External users should not
import from here directly; the public names live in :mod:`contextcontainer`.
"""
