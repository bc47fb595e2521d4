"""Data models for FlowFast CLI."""
