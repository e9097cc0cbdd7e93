"""Serverless entry points."""
