#! /usr/bin/env python3

import argparse
import sys
import unittest

from test_account import TestLedgerAccount
from test_response import TestDecomposeResponse
from test_exchange import TestCRC, TestConstructor, TestExchange, TestExchangeFailures, TestProgress
from test_client import TestConstructor as TestClientConstructor, TestGetPubKey, TestSign, TestPing, TestVersion, TestWithSimulator, TestDeviceStrings, TestLoggingProgress
from test_transport import TestLedgerTransport, TestEmulatorFraming
from test_cli import TestCommands, TestEnumerate, TestStatusWords
from test_device import device_test_suite

parser = argparse.ArgumentParser(description='Run automated tests, and optionally the tests against a device')
parser.add_argument('--device-path', dest='device_path', help='Path of a device running the Lisk app, tcp:127.0.0.1:9999 for Speculos')
parser.add_argument('--interface', help='Which interface to send commands over', choices=['library', 'cli', 'stdin'], default='library')
parser.add_argument("--device-only", help="Only run device tests", action="store_true")

args = parser.parse_args()

# Run tests
success = True
suite = unittest.TestSuite()
if not args.device_only:
    for case in [
        TestLedgerAccount,
        TestDecomposeResponse,
        TestCRC,
        TestConstructor,
        TestExchange,
        TestExchangeFailures,
        TestProgress,
        TestClientConstructor,
        TestGetPubKey,
        TestSign,
        TestPing,
        TestVersion,
        TestWithSimulator,
        TestDeviceStrings,
        TestLoggingProgress,
        TestLedgerTransport,
        TestEmulatorFraming,
        TestCommands,
        TestEnumerate,
        TestStatusWords,
    ]:
        suite.addTests(unittest.defaultTestLoader.loadTestsFromTestCase(case))
    success = unittest.TextTestRunner(stream=sys.stdout, verbosity=2).run(suite).wasSuccessful()

if success and args.device_path:
    success &= device_test_suite(args.device_path, args.interface)

sys.exit(not success)
