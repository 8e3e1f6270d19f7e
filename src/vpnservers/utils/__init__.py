"""Network and file-format helpers with no dependency on ``core`` or ``services``.

Attributes:
    dns: Single-shot A/AAAA lookup via ``dnspython``.
    http: Bounded archive download (``aiohttp``) and zip extraction.
    ovpn: ``remote`` host extraction from OpenVPN configuration files.
"""
