"""Shared helpers for uiauto_breadcrumb."""
