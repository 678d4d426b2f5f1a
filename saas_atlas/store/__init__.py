"""Data store access for SaaS Atlas."""

from .client import SupabaseClient
from .loader import CompanySource, DirectoryLoader

__all__ = ['SupabaseClient', 'CompanySource', 'DirectoryLoader']
