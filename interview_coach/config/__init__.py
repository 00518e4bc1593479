"""
Configuration for Interview Coach
"""
