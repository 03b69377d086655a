"""
tests/test_asn_lookup.py
Unit tests for the Cymru whois client: reply parsing and the
accumulate-until-close session against a local fake server.
Run: pytest tests/test_asn_lookup.py -v
"""

import sys
import os
import asyncio
import contextlib
import socket
import struct
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from core.asn_lookup import (
    AsnLookupClient, AsnLookupError, AsnRecord, parse_whois_response,
)
from utils.constants import CYMRU_WHOIS_HOST, CYMRU_WHOIS_PORT


HEADER = "AS | IP | BGP Prefix | CC | Registry | Allocated | AS Name\n"
GOOGLE_ROW = "15169 | 8.8.8.8 | 8.8.8.0/24 | US | ARIN | 1992-12-01 | GOOGLE - Google LLC, US\n"
GOOGLE = AsnRecord(
    asn="15169",
    reported_ip="8.8.8.8",
    prefix="8.8.8.0/24",
    country_code="US",
    registry="ARIN",
    allocated_date="1992-12-01",
    as_name="GOOGLE - Google LLC, US",
)


@contextlib.asynccontextmanager
async def fake_whois(chunks, hold=None, delay=0.0):
    """
    Local stand-in for whois.cymru.com:43.
    Yields (port, queries); closes the session after sending chunks,
    or once `hold` is set when given.
    """
    queries = []

    async def handle(reader, writer):
        queries.append(await reader.readline())
        for chunk in chunks:
            writer.write(chunk)
            await writer.drain()
            if delay:
                await asyncio.sleep(delay)
        if hold is not None:
            await hold.wait()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    async with server:
        yield port, queries


# ─── Reply parsing ────────────────────────────────────────────────────────────

class TestParseWhoisResponse:

    def test_google_sample(self):
        assert parse_whois_response(HEADER + GOOGLE_ROW) == GOOGLE

    def test_real_column_padding(self):
        text = (
            "AS      | IP               | BGP Prefix          | CC | Registry | Allocated  | AS Name\n"
            "13335   | 1.1.1.1          | 1.1.1.0/24          | AU | apnic    | 2011-08-11 | CLOUDFLARENET, US\n"
        )
        rec = parse_whois_response(text)
        assert rec.asn == "13335"
        assert rec.prefix == "1.1.1.0/24"
        assert rec.as_name == "CLOUDFLARENET, US"

    def test_header_only_is_none(self):
        assert parse_whois_response(HEADER) is None

    def test_empty_is_none(self):
        assert parse_whois_response("") is None

    def test_blank_lines_are_skipped(self):
        assert parse_whois_response("\n\n" + HEADER + "\n   \n" + GOOGLE_ROW + "\n") == GOOGLE

    def test_crlf_line_endings(self):
        text = (HEADER + GOOGLE_ROW).replace("\n", "\r\n")
        assert parse_whois_response(text) == GOOGLE

    def test_short_row_is_none(self):
        assert parse_whois_response(HEADER + "15169 | 8.8.8.8 | 8.8.8.0/24 | US\n") is None

    def test_six_fields_is_none(self):
        row = "15169 | 8.8.8.8 | 8.8.8.0/24 | US | ARIN | 1992-12-01\n"
        assert parse_whois_response(HEADER + row) is None

    def test_error_line_is_none(self):
        text = "Error: no ASN or IP match on line 1.\n"
        assert parse_whois_response(text) is None

    def test_extra_columns_ignored(self):
        row = GOOGLE_ROW.rstrip("\n") + " | extra | more\n"
        assert parse_whois_response(HEADER + row) == GOOGLE

    def test_only_first_data_row_used(self):
        other = "13335 | 1.1.1.1 | 1.1.1.0/24 | AU | APNIC | 2011-08-11 | CLOUDFLARENET, US\n"
        assert parse_whois_response(HEADER + GOOGLE_ROW + other) == GOOGLE

    def test_empty_fields_are_kept_not_invented(self):
        row = "NA | 10.0.0.1 | NA | | | | NA\n"
        rec = parse_whois_response(HEADER + row)
        assert rec.country_code == ""
        assert rec.registry == ""
        assert rec.asn == "NA"


# ─── Client session ───────────────────────────────────────────────────────────

class TestAsnLookupClient:

    def test_defaults_point_at_cymru(self):
        client = AsnLookupClient()
        assert client._host == CYMRU_WHOIS_HOST == "whois.cymru.com"
        assert client._port == CYMRU_WHOIS_PORT == 43

    @pytest.mark.asyncio
    async def test_query_line_and_parse(self):
        async with fake_whois([(HEADER + GOOGLE_ROW).encode()]) as (port, queries):
            rec = await AsnLookupClient(host="127.0.0.1", port=port).lookup("8.8.8.8")
        assert queries == [b"-v 8.8.8.8\n"]
        assert rec == GOOGLE

    @pytest.mark.asyncio
    async def test_ipv6_passed_verbatim(self):
        async with fake_whois([HEADER.encode()]) as (port, queries):
            rec = await AsnLookupClient(host="127.0.0.1", port=port).lookup("2001:4860:4860::8888")
        assert queries == [b"-v 2001:4860:4860::8888\n"]
        assert rec is None

    @pytest.mark.asyncio
    async def test_accumulates_chunks_until_close(self):
        payload = (HEADER + GOOGLE_ROW).encode()
        chunks = [payload[i:i + 7] for i in range(0, len(payload), 7)]
        async with fake_whois(chunks, delay=0.005) as (port, _):
            rec = await AsnLookupClient(host="127.0.0.1", port=port).lookup("8.8.8.8")
        assert rec == GOOGLE

    @pytest.mark.asyncio
    async def test_empty_reply_is_none(self):
        async with fake_whois([]) as (port, _):
            rec = await AsnLookupClient(host="127.0.0.1", port=port).lookup("8.8.8.8")
        assert rec is None

    @pytest.mark.asyncio
    async def test_invalid_utf8_does_not_raise(self):
        payload = HEADER.encode() + b"15169 | 8.8.8.8 | 8.8.8.0/24 | US | ARIN | 1992-12-01 | G\xffOOGLE\n"
        async with fake_whois([payload]) as (port, _):
            rec = await AsnLookupClient(host="127.0.0.1", port=port).lookup("8.8.8.8")
        assert rec.asn == "15169"

    @pytest.mark.asyncio
    async def test_connect_refused_is_lookup_error(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 0))
            port = s.getsockname()[1]
        with pytest.raises(AsnLookupError):
            await AsnLookupClient(host="127.0.0.1", port=port).lookup("8.8.8.8")

    @pytest.mark.asyncio
    async def test_reset_mid_stream_is_lookup_error(self):
        async def handle(reader, writer):
            await reader.readline()
            writer.write(HEADER[:10].encode())
            await writer.drain()
            # zero linger turns the abort into an RST rather than a FIN
            sock = writer.get_extra_info("socket")
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_LINGER, struct.pack("ii", 1, 0))
            writer.transport.abort()

        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        async with server:
            with pytest.raises(AsnLookupError):
                await AsnLookupClient(host="127.0.0.1", port=port).lookup("8.8.8.8")

    @pytest.mark.asyncio
    async def test_ceiling_bounds_a_server_that_never_closes(self):
        hold = asyncio.Event()
        try:
            async with fake_whois([HEADER.encode()], hold=hold) as (port, _):
                client = AsnLookupClient(ceiling_s=0.2, host="127.0.0.1", port=port)
                with pytest.raises(AsnLookupError, match="within 0.2s"):
                    await client.lookup("8.8.8.8")
                hold.set()
        finally:
            hold.set()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short", "-x"])
