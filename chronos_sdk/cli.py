"""
chronos-sdk command line.

Configuration comes from CHRONOS_* environment variables
(see SDKConfig.from_env).

    chronos-sdk secret
    chronos-sdk stats
    chronos-sdk consensus <operation_id> [--wait] [--timeout 300]
    chronos-sdk swap <swap_id>
    chronos-sdk vault <vault_id>
    chronos-sdk transfer <transfer_id>
    chronos-sdk routes
    chronos-sdk chains
"""

import sys
import json
import logging
import argparse
from dataclasses import asdict, is_dataclass
from enum import Enum

from .config import SDKConfig
from .core import generate_secret
from .errors import SDKError
from .sdk import ChronosVaultSDK, VERSION

log = logging.getLogger(__name__)


def _jsonable(obj):
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj):
        return asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    return str(obj)


def _print(obj):
    print(json.dumps(obj, indent=2, default=_jsonable))


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_secret(sdk: ChronosVaultSDK, args):
    secret, secret_hash = generate_secret()
    _print({"secret": secret, "secret_hash": secret_hash})


def cmd_stats(sdk: ChronosVaultSDK, args):
    stats = sdk.trinity.get_stats()
    _print({
        "chains": {name: status.to_dict() for name, status in stats.chains.items()},
        "protocol": stats.protocol,
        "vaults": stats.vaults,
        "validators": stats.validators,
    })


def cmd_consensus(sdk: ChronosVaultSDK, args):
    if args.wait:
        op = sdk.trinity.wait_for_consensus(
            args.operation_id,
            timeout=args.timeout,
            on_progress=lambda o: log.info(f"{o.confirmations}/{o.required_confirmations} ({o.status})"),
        )
    else:
        op = sdk.trinity.get_consensus_operation(args.operation_id)
    _print(op)


def cmd_swap(sdk: ChronosVaultSDK, args):
    _print(sdk.htlc.get_swap(args.swap_id))


def cmd_vault(sdk: ChronosVaultSDK, args):
    _print(sdk.vault.get_vault(args.vault_id))


def cmd_transfer(sdk: ChronosVaultSDK, args):
    _print(sdk.bridge.get_transfer(args.transfer_id))


def cmd_routes(sdk: ChronosVaultSDK, args):
    _print(sdk.bridge.get_available_routes())


def cmd_chains(sdk: ChronosVaultSDK, args):
    _print(sdk.get_chain_status())


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chronos-sdk",
        description="Chronos Vault / Trinity Protocol client"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("secret", help="Generate an HTLC secret and keccak256 hashlock")
    p.set_defaults(func=cmd_secret)

    p = sub.add_parser("stats", help="Trinity scanner statistics")
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("consensus", help="Consensus operation status")
    p.add_argument("operation_id")
    p.add_argument("--wait", action="store_true", help="Block until 2-of-3 consensus")
    p.add_argument("--timeout", type=float, default=300, help="Seconds to wait (default 300)")
    p.set_defaults(func=cmd_consensus)

    p = sub.add_parser("swap", help="HTLC swap details")
    p.add_argument("swap_id")
    p.set_defaults(func=cmd_swap)

    p = sub.add_parser("vault", help="Vault details")
    p.add_argument("vault_id")
    p.set_defaults(func=cmd_vault)

    p = sub.add_parser("transfer", help="Bridge transfer details")
    p.add_argument("transfer_id")
    p.set_defaults(func=cmd_transfer)

    p = sub.add_parser("routes", help="Supported bridge routes")
    p.set_defaults(func=cmd_routes)

    p = sub.add_parser("chains", help="RPC connectivity per chain")
    p.set_defaults(func=cmd_chains)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        with ChronosVaultSDK(SDKConfig.from_env()) as sdk:
            args.func(sdk, args)
    except SDKError as e:
        print(f"ERROR [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
