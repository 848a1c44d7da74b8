"""
EWFund App - Equal-Market-Weight Index Fund Allocator

Downloads a published list of equity constituents, weights every stock
against the largest market capitalization in the set, and converts a target
portfolio budget into integer share counts per stock.
"""

__version__ = "0.1.0"
__author__ = "EWFund Team"
