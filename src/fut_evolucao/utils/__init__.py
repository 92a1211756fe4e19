"""Utility helpers."""

from fut_evolucao.utils.id_generator import IdGenerator, generate_id, now_ms
from fut_evolucao.utils.shuffler import Shuffler

__all__ = ["IdGenerator", "Shuffler", "generate_id", "now_ms"]
