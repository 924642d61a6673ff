#! /usr/bin/env python3

from .commands import (
    enumerate,
    find_device,
    get_client,
    getpubkey,
    getversion,
    ping,
    signmessage,
    signtx,
)
from .errors import (
    handle_errors,
    DEVICE_CONN_ERROR,
    HELP_TEXT,
    MISSING_ARGUMENTS,
    NO_DEVICE_FOUND,
)
from .devices.ledger import LedgerClient
from .devices.ledger_lisk.exchange import MAX_CHUNK_SIZE
from . import __version__

import argparse
import logging
import json
import sys

from typing import (
    Any,
    Dict,
    IO,
    List,
    NoReturn,
    Optional,
)


def enumerate_handler(args: argparse.Namespace) -> List[Dict[str, Any]]:
    return enumerate(allow_emulators=args.allow_emulators)

def getpubkey_handler(args: argparse.Namespace, client: LedgerClient) -> Dict[str, str]:
    return getpubkey(client, account=args.account, display=args.display)

def signtx_handler(args: argparse.Namespace, client: LedgerClient) -> Dict[str, str]:
    return signtx(client, tx=args.tx, account=args.account)

def signmessage_handler(args: argparse.Namespace, client: LedgerClient) -> Dict[str, str]:
    return signmessage(client, message=args.message, account=args.account)

def version_handler(args: argparse.Namespace, client: LedgerClient) -> Dict[str, str]:
    return getversion(client)

def ping_handler(args: argparse.Namespace, client: LedgerClient) -> Dict[str, bool]:
    return ping(client)

class LiskHelpFormatter(argparse.ArgumentDefaultsHelpFormatter, argparse.RawDescriptionHelpFormatter):
    pass

class LiskArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.formatter_class = LiskHelpFormatter

    def print_usage(self, file: Optional[IO[str]] = None) -> None:
        if file is None:
            file = sys.stderr
        super().print_usage(file)

    def print_help(self, file: Optional[IO[str]] = None) -> None:
        if file is None:
            file = sys.stderr
        super().print_help(file)
        error = {'error': 'Help text requested', 'code': HELP_TEXT}
        print(json.dumps(error))

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        args = {'prog': self.prog, 'message': message}
        error = {'error': '%(prog)s: error: %(message)s' % args, 'code': MISSING_ARGUMENTS}
        print(json.dumps(error))
        self.exit(2)

def chunk_size(s: str) -> int:
    n = int(s)
    if not 1 <= n <= MAX_CHUNK_SIZE:
        raise argparse.ArgumentTypeError('must be between 1 and {}'.format(MAX_CHUNK_SIZE))
    return n

def get_parser() -> LiskArgumentParser:
    parser = LiskArgumentParser(description='Lisk Ledger Interface, version {}.\nAccess and send commands to a Ledger device running the Lisk app. Responses are in JSON format.'.format(__version__))
    parser.add_argument('--device-path', '-d', help='Specify the device path of the device to connect to. If not given, the first device enumerated is used.')
    parser.add_argument('--chunk-size', help='Number of payload bytes sent per APDU', type=chunk_size, default=MAX_CHUNK_SIZE)
    parser.add_argument('--debug', help='Print debug statements', action='store_true')
    parser.add_argument('--version', action='version', version='%(prog)s {}'.format(__version__))
    parser.add_argument('--stdin', help='Enter commands and arguments via stdin', action='store_true')
    parser.add_argument("--emulators", help="Enable enumeration and detection of device emulators", action="store_true", dest="allow_emulators")

    subparsers = parser.add_subparsers(description='Commands', dest='command')
    # work-around to make subparser required
    subparsers.required = True

    enumerate_parser = subparsers.add_parser('enumerate', help='List all available devices')
    enumerate_parser.set_defaults(func=enumerate_handler)

    getpubkey_parser = subparsers.add_parser('getpubkey', help='Get the public key and address of an account')
    getpubkey_parser.add_argument('--account', help='The account number', type=int, default=0)
    getpubkey_parser.add_argument('--display', help='Show the address on the device for confirmation', action='store_true')
    getpubkey_parser.set_defaults(func=getpubkey_handler)

    signtx_parser = subparsers.add_parser('signtx', help='Sign a transaction')
    signtx_parser.add_argument('tx', help='The hex encoded signing bytes of the transaction')
    signtx_parser.add_argument('--account', help='The account number', type=int, default=0)
    signtx_parser.set_defaults(func=signtx_handler)

    signmsg_parser = subparsers.add_parser('signmessage', help='Sign a message')
    signmsg_parser.add_argument('message', help='The message to sign')
    signmsg_parser.add_argument('--account', help='The account number', type=int, default=0)
    signmsg_parser.set_defaults(func=signmessage_handler)

    version_parser = subparsers.add_parser('version', help='Get the version of the Lisk app')
    version_parser.set_defaults(func=version_handler)

    ping_parser = subparsers.add_parser('ping', help='Check the Lisk app answers')
    ping_parser.set_defaults(func=ping_handler)

    return parser

def process_commands(cli_args: List[str]) -> Any:
    parser = get_parser()

    if any(arg == '--stdin' for arg in cli_args):
        while True:
            try:
                line = input()
                # Exit loop when we see 2 consecutive newlines (i.e. an empty line)
                if line == '':
                    break
                # Split the line and append it to the cli args
                import shlex
                cli_args.extend(shlex.split(line))
            except EOFError:
                # If we see EOF, stop taking input
                break

    # Parse arguments again for anything entered over stdin
    args = parser.parse_args(cli_args)

    command = args.command
    result: Dict[str, Any] = {}

    # Setup debug logging
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    # List all available devices
    if command == 'enumerate':
        return args.func(args)

    client: Optional[LedgerClient] = None
    if args.device_path:
        with handle_errors(result=result, code=DEVICE_CONN_ERROR):
            client = get_client(args.device_path, args.chunk_size)
        if 'error' in result:
            return result
    else:
        with handle_errors(result=result, code=DEVICE_CONN_ERROR):
            client = find_device(args.allow_emulators, args.chunk_size)
        if 'error' in result:
            return result
        if client is None:
            return {'error': 'Could not find a device running the Lisk app', 'code': NO_DEVICE_FOUND}

    # Do the commands
    with handle_errors(result=result, debug=args.debug):
        result = args.func(args, client)

    with handle_errors(result=result, debug=args.debug):
        client.close()

    return result

def main() -> None:
    result = process_commands(sys.argv[1:])
    print(json.dumps(result))
