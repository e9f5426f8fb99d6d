"""Cluster add-on installers.

Import from the submodules directly: ``exceptions``, ``models`` and
``flagger``.
"""
