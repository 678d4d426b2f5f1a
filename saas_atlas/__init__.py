"""SaaS Atlas

A browsable and searchable directory of SaaS companies, with derived links to
each company's documentation, community and support resources.
"""

__version__ = "0.1.0"
__description__ = "Searchable directory of SaaS products and their support resources"
