"""
csv2json: Stream delimited tabular files into JSON documents.

Rows are parsed, handed across a bounded channel and written as a JSON
array incrementally, so memory use does not grow with the input size.
"""

__version__ = "0.1.0"
