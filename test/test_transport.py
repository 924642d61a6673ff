#! /usr/bin/env python3

"""Tests for the APDU transport over ledgercomm"""

import unittest
from unittest import mock

from lisklib.devices.ledger_lisk import transport as transport_mod
from lisklib.devices.ledger_lisk.transport import ApduException, LedgerTransport
from lisklib.errors import BadArgumentError, DeviceConnectionError


class TestLedgerTransport(unittest.TestCase):
    def setUp(self):
        self.Transport = mock.patch.object(transport_mod, "Transport").start()
        self.com = self.Transport.return_value
        self.addCleanup(mock.patch.stopall)

    def test_open(self):
        LedgerTransport("hid", hid_path=b"path", debug=True)
        self.Transport.assert_called_once_with(interface="hid", server="127.0.0.1", port=9999, hid_path=b"path", debug=True)

    def test_open_emulator(self):
        LedgerTransport("tcp", server="10.0.0.2", port=40000)
        self.Transport.assert_called_once_with(interface="tcp", server="10.0.0.2", port=40000, hid_path=None, debug=False)

    def test_send(self):
        transport = LedgerTransport()
        self.com.exchange.return_value = (0x9000, bytes.fromhex("0102000300"))

        self.assertEqual(transport.send(0xe0, 89, 0, 0, b"\x00\x03"), bytes.fromhex("0102000300"))
        self.com.exchange.assert_called_once_with(cla=0xe0, ins=89, p1=0, p2=0, cdata=b"\x00\x03")

    def test_send_no_data(self):
        transport = LedgerTransport()
        self.com.exchange.return_value = (0x9000, b"")
        transport.send(0xe0, 91)
        self.com.exchange.assert_called_once_with(cla=0xe0, ins=91, p1=0, p2=0, cdata=b"")

    def test_status_word(self):
        transport = LedgerTransport()
        self.com.exchange.return_value = (0x6803, b"\x01")
        with self.assertRaises(ApduException) as cm:
            transport.send(0xe0, 89, 0, 0, b"\xff\xff")
        self.assertEqual(cm.exception.sw, 0x6803)
        self.assertEqual(cm.exception.data, b"\x01")
        self.assertIn("0x6803", str(cm.exception))

    def test_data_too_long(self):
        transport = LedgerTransport()
        with self.assertRaises(BadArgumentError):
            transport.send(0xe0, 90, 0, 0, bytes(256))
        self.com.exchange.assert_not_called()

    def test_unknown_interface(self):
        with self.assertRaises(BadArgumentError):
            LedgerTransport("u2f")
        self.Transport.assert_not_called()

    def test_no_device(self):
        self.Transport.side_effect = AssertionError("No Ledger device has been found!")
        with self.assertRaises(DeviceConnectionError):
            LedgerTransport("hid")

    def test_connection_refused(self):
        self.Transport.side_effect = ConnectionRefusedError("refused")
        with self.assertRaises(OSError):
            LedgerTransport("tcp")

    def test_close(self):
        transport = LedgerTransport()
        transport.close()
        self.com.close.assert_called_once_with()

    def test_scramble_key(self):
        transport = LedgerTransport()
        transport.set_scramble_key("hirishh")
        self.assertEqual(transport.scramble_key, "hirishh")


class FakeSocket(object):
    def __init__(self) -> None:
        self.address = None
        self.sent = b""
        self.incoming = b""
        self.closed = False

    def connect(self, address):
        self.address = address

    def send(self, data):
        self.sent += data
        return len(data)

    def recv(self, size):
        data, self.incoming = self.incoming[:size], self.incoming[size:]
        return data

    def close(self):
        self.closed = True


class TestEmulatorFraming(unittest.TestCase):
    def setUp(self):
        self.sock = FakeSocket()
        mock.patch("socket.socket", return_value=self.sock).start()
        self.addCleanup(mock.patch.stopall)

    def test_send(self):
        transport = LedgerTransport("tcp", server="127.0.0.1", port=9999)
        self.assertEqual(self.sock.address, ("127.0.0.1", 9999))

        self.sock.incoming = (3).to_bytes(4, "big") + b"abc" + b"\x90\x00"
        self.assertEqual(transport.send(0xe0, 91), b"abc")
        self.assertEqual(self.sock.sent, bytes.fromhex("00000005" "e05b000000"))

        transport.close()
        self.assertTrue(self.sock.closed)

    def test_status_word(self):
        transport = LedgerTransport("tcp")
        self.sock.incoming = (0).to_bytes(4, "big") + b"\x69\x85"
        with self.assertRaises(ApduException) as cm:
            transport.send(0xe0, 90, 0, 0, b"\x01")
        self.assertEqual(cm.exception.sw, 0x6985)
        self.assertEqual(self.sock.sent, bytes.fromhex("00000006" "e05a000001" "01"))

if __name__ == "__main__":
    unittest.main()
