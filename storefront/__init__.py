"""Storefront guest cart service."""
