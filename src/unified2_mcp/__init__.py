"""
unified2_mcp

Decoder for unified2 event logs written by Snort and Suricata, plus an MCP
server that exposes reading and tailing of those logs as tools.

Core ideas
1. The framer reads one length prefixed record, and rewinds when the
   record is not fully written yet
2. Type decoders turn the raw body into EventRecord, PacketRecord or
   ExtraDataRecord
3. Capabilities own files and cursors, the core never opens anything
"""

__all__ = ["core", "capabilities", "cli", "utils"]
