# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Protocol adapters for Java and Bedrock servers."""

from __future__ import annotations

from anarchybot.transport.base import Emit, ProtocolAdapter, Variant
from anarchybot.transport.bedrock import BedrockAdapter
from anarchybot.transport.bridge import JsBridge
from anarchybot.transport.java import JavaAdapter

__all__ = ["BedrockAdapter", "Emit", "JavaAdapter", "JsBridge", "ProtocolAdapter", "Variant"]
