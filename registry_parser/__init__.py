"""
Business Registry Parser
========================
Extracts business-registration records from a registry PDF and serves
them over HTTP.

Architecture:
    - Fragment Source: Yields ordered text fragments from PDF pages
    - Record Assembler: Rebuilds records using the business ID as boundary
    - Field Formatter: Normalizes each assigned field value
    - Pagination: Slices the finished records into fixed-size pages
    - HTTP Service: Flask API returning {data, total} JSON

Version: 1.0.0
"""

__version__ = "1.0.0"
