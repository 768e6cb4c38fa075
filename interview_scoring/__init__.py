"""
Interview scoring package.

This package implements the scoring of autobiographical interviews:
- importing transcripts as interviews of a project,
- assigning detail categories to spans of tokens, including nested and
  interrupted selections,
- counting category occurrences, sequences and patterns,
- writing a spreadsheet report.
"""
