"""Command line interface for alpm"""
