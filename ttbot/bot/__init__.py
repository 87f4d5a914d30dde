"""Telegram bot implementation package.

Contains the message processing pipeline: link extraction, caption
formatting, media delivery, command dispatch and user-facing message
templates.
"""
