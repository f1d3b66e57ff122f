"""Command-line tools and standalone helpers.

This package contains the ``signallab-analyze`` entry point, the Matplotlib
result plotter it can hand off to, and the opt-in timing helpers used by the
pipeline when ``SIGNALLAB_DEBUG`` is set.
"""
