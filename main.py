#!/usr/bin/env python3
"""
xorbreak - Repeating-key XOR cryptanalysis tool

A command-line tool that recovers the key and plaintext of repeating-key XOR
ciphertext, plus the small XOR/encoding helpers used along the way.
"""

import argparse
import dataclasses
import sys
from typing import Optional, List

from xorbreak.__version__ import __version__
from xorbreak.analysis.single_byte import detect_single_byte_xor
from xorbreak.breaker import RepeatingKeyXORBreaker
from xorbreak.config import BreakerConfig, DetectionConfig
from xorbreak.error_handling import XorBreakError, get_error_handler
from xorbreak.formatter import OutputFormatter
from xorbreak.input_handler import InputHandler, ENCODINGS
from xorbreak.utils.codecs import ByteCodec
from xorbreak.utils.xor_tools import XORTools


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser"""
    defaults = BreakerConfig()
    detect_defaults = DetectionConfig()

    parser = argparse.ArgumentParser(
        prog='xorbreak',
        description='🔓 xorbreak - Repeating-key XOR cryptanalysis',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
📖 QUICK START:

  Break a file of Base64 lines:
    xorbreak break 6.txt --output plaintext.txt

  Break a hex ciphertext:
    xorbreak break --hex 0b3637272a2b2e63622c2e69...

  Encrypt with a repeating key:
    xorbreak encrypt "Burning 'em" --key ICE

  Find the single-byte XOR line in a file of hex strings:
    xorbreak detect 4.txt

  Serve the JSON API:
    xorbreak serve --port 8000
        """
    )
    parser.add_argument('--version', action='version', version=f'xorbreak {__version__}')
    parser.add_argument('--debug', action='store_true',
                        help='Verbose logging and tracebacks on error')

    commands = parser.add_subparsers(dest='command', metavar='COMMAND')

    # break
    brk = commands.add_parser('break', help='Recover key and plaintext from ciphertext')
    source = brk.add_mutually_exclusive_group()
    source.add_argument('file', nargs='?', help='Ciphertext file (default: stdin)')
    source.add_argument('--hex', metavar='TEXT', help='Ciphertext given as a hex argument')
    brk.add_argument('--encoding', choices=ENCODINGS, default='base64',
                     help='Encoding of the file or stdin (default: base64)')
    brk.add_argument('-o', '--output', metavar='FILE', help='Write plaintext to FILE')

    tuning = brk.add_argument_group('🔧 Tuning Options')
    tuning.add_argument('--chi2-threshold', type=float, default=defaults.chi2_threshold,
                        help=f'Chi-square threshold (default: {defaults.chi2_threshold:g})')
    tuning.add_argument('--candidates', type=int, default=defaults.candidate_keysizes,
                        help=f'Keysizes to try (default: {defaults.candidate_keysizes})')
    tuning.add_argument('--printable-ratio', type=float, default=defaults.printable_ratio,
                        help=f'Minimum letter/space ratio (default: {defaults.printable_ratio:g})')
    tuning.add_argument('--min-keysize', type=int, default=defaults.min_keysize,
                        help=f'Smallest keysize (default: {defaults.min_keysize})')
    tuning.add_argument('--max-keysize', type=int, default=defaults.max_keysize,
                        help=f'Largest keysize (default: {defaults.max_keysize})')
    tuning.add_argument('--sample-pairs', type=int, default=defaults.sample_pairs,
                        help=f'Block pairs sampled per keysize (default: {defaults.sample_pairs})')

    # encrypt
    enc = commands.add_parser('encrypt', help='Repeating-key XOR encrypt text (hex output)')
    enc.add_argument('text', help='Plaintext')
    enc.add_argument('-k', '--key', required=True, help='Key text')
    enc.add_argument('-o', '--output', metavar='FILE', help='Write hex to FILE')

    # detect
    det = commands.add_parser('detect', help='Find single-byte XOR lines in a hex file')
    det.add_argument('file', help='File with one hex ciphertext per line')
    det.add_argument('--chi2-threshold', type=float, default=detect_defaults.chi2_threshold,
                     help=f'Chi-square threshold (default: {detect_defaults.chi2_threshold:g})')
    det.add_argument('--printable-ratio', type=float, default=detect_defaults.printable_ratio,
                     help=f'Minimum letter/space ratio (default: {detect_defaults.printable_ratio:g})')
    det.add_argument('--max-results', type=int, default=10, help='Candidates to show (default: 10)')

    # fixed-xor
    fx = commands.add_parser('fixed-xor', help='XOR two equal-length hex strings')
    fx.add_argument('hex1')
    fx.add_argument('hex2')

    # hex2base64
    hb = commands.add_parser('hex2base64', help='Convert hex to Base64')
    hb.add_argument('hex')

    # serve
    srv = commands.add_parser('serve', help='Run the JSON web API')
    srv.add_argument('--port', type=int, default=8000, metavar='PORT',
                     help='Port for web server (default: 8000)')

    return parser


def run_break(args: argparse.Namespace, input_handler: InputHandler) -> int:
    config = dataclasses.replace(
        BreakerConfig(),
        min_keysize=args.min_keysize,
        max_keysize=args.max_keysize,
        sample_pairs=args.sample_pairs,
        candidate_keysizes=args.candidates,
        chi2_threshold=args.chi2_threshold,
        printable_ratio=args.printable_ratio,
    )

    if args.hex:
        ciphertext = input_handler.read_ciphertext_text(args.hex, 'hex')
    elif args.file:
        ciphertext = input_handler.read_ciphertext_file(args.file, args.encoding)
    else:
        ciphertext = input_handler.read_ciphertext_stdin(args.encoding)

    result = RepeatingKeyXORBreaker(config).analyze(ciphertext)
    print(OutputFormatter().format_break_report(result), file=sys.stderr)
    input_handler.write_output(result.plaintext, args.output)
    return 0


def run_encrypt(args: argparse.Namespace, input_handler: InputHandler) -> int:
    ciphertext = XORTools.repeating_key_xor(args.text.encode('utf-8'), args.key.encode('utf-8'))
    input_handler.write_output(ByteCodec.bytes_to_hex(ciphertext).encode('ascii'), args.output)
    return 0


def run_detect(args: argparse.Namespace, input_handler: InputHandler) -> int:
    DetectionConfig(args.chi2_threshold, args.printable_ratio).validate()
    lines = input_handler.read_lines(args.file)
    detections = detect_single_byte_xor(lines, args.chi2_threshold, args.printable_ratio)
    print(OutputFormatter().format_detections(detections, args.max_results))
    return 0 if detections else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the xorbreak CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    handler = get_error_handler(debug_mode=args.debug)
    input_handler = InputHandler()

    try:
        if args.command == 'break':
            return run_break(args, input_handler)
        if args.command == 'encrypt':
            return run_encrypt(args, input_handler)
        if args.command == 'detect':
            return run_detect(args, input_handler)
        if args.command == 'fixed-xor':
            print(XORTools.xor_hex_strings(args.hex1, args.hex2))
            return 0
        if args.command == 'hex2base64':
            print(ByteCodec.hex_to_base64(args.hex))
            return 0
        if args.command == 'serve':
            from xorbreak.web.server import WebAPIServer
            WebAPIServer(port=args.port).start(debug=args.debug)
            return 0
    except XorBreakError as e:
        handler.handle_error(e)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130

    parser.error(f"unknown command: {args.command}")


if __name__ == '__main__':
    sys.exit(main())
