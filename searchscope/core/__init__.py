# searchscope/core/__init__.py
"""Core resolution logic and the downstream ripgrep argument builder."""
