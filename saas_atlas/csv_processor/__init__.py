"""CSV processor package for SaaS Atlas."""

from saas_atlas.core.exceptions import CSVValidationError
from .reader import CompanyCSVReader
from .writer import CompanyCSVWriter

__all__ = ['CompanyCSVReader', 'CSVValidationError', 'CompanyCSVWriter']
