"""
Domain Services - Technical Analysis
====================================
Incremental indicators and the analyzers built on top of them.
"""
