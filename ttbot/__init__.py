"""TikTok Relay Bot Application Package.

A Telegram webhook bot that detects TikTok links in chat messages, resolves
them through the tikwm.com API and relays the video or photo slideshow back
to the chat, removing the original message afterwards.

The application follows a modular architecture with separate concerns for:
- Webhook ingress and secret validation
- Link extraction, caption formatting and media delivery
- Bot command dispatch
- External media resolution
"""
