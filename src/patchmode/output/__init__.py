"""Renderers for resolved modes — terminal, JSON, YAML."""
