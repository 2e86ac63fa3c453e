"""Command-line entry point for edsign."""

import logging

import click

from .. import __version__
from ..config import EdSignConfig
from ..crypto import KeyStore
from ..errors import EdSignError, KeyExistsError
from ..files import Signer, Verifier, expand_pattern

logger = logging.getLogger(__name__)


def _create(key_store: KeyStore, force: bool):
    try:
        key_store.create_keypair(overwrite=force)
    except KeyExistsError as e:
        raise KeyExistsError(f"{e} (use --force to overwrite)") from e
    click.echo("Key pair generated successfully.")
    click.echo(f"Private key file created: {key_store.default_private_key_path()}")
    click.echo(f"Public key file created: {key_store.default_public_key_path()}")
    return []


def _sign(key_store: KeyStore, args, keep_going: bool):
    if not 1 <= len(args) <= 3:
        raise click.UsageError("--sign takes FILE_GLOB [COMMENT] [KEY_PATH]")
    file_glob = args[0]
    comment = args[1] if len(args) > 1 else None
    key_path = args[2] if len(args) > 2 else None

    signer = Signer(key_store.load_private_key(key_path))
    files = expand_pattern(file_glob)
    logger.debug(f"Signing {len(files)} file(s) matching {file_glob}")
    return signer.sign_files(files, comment=comment, fail_fast=not keep_going)


def _verify(key_store: KeyStore, args, keep_going: bool):
    if not 1 <= len(args) <= 2:
        raise click.UsageError("--verify takes FILE_OR_DIR_GLOB [PUBLIC_KEY_PATH]")
    file_glob = args[0]
    public_key_path = args[1] if len(args) > 1 else None

    files = expand_pattern(file_glob, include_directories=True)
    logger.debug(f"Verifying {len(files)} file(s) matching {file_glob}")
    verifier = Verifier(key_store)
    return verifier.verify_files(files, public_key_path, fail_fast=not keep_going)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(__version__, prog_name='edsign')
@click.option('-s', '--sign', 'sign_mode', is_flag=True,
              help='Sign files matching FILE_GLOB, args: FILE_GLOB [COMMENT] [KEY_PATH]')
@click.option('-c', '--create', 'create_mode', is_flag=True,
              help='Create an Ed25519 key pair in ~/.edsign')
@click.option('-v', '--verify', 'verify_mode', is_flag=True,
              help='Verify files matching the pattern, args: FILE_OR_DIR_GLOB [PUBLIC_KEY_PATH]')
@click.option('--force', is_flag=True, help='Allow --create to overwrite existing keys')
@click.option('--keep-going', is_flag=True, help='Process every matched file even if one fails')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.argument('args', nargs=-1, metavar='[ARGS]...')
@click.pass_context
def cli(ctx, sign_mode, create_mode, verify_mode, force, keep_going, debug, args):
    """edsign - sign and verify files with Ed25519 detached signatures.

    Put -- before ARGS when a comment or path starts with a dash:

    \b
        edsign -s -- "*.tar.gz" -rc1
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    config = ctx.obj if isinstance(ctx.obj, EdSignConfig) else EdSignConfig.default()
    key_store = KeyStore(config)

    try:
        # First selected mode wins: sign, then create, then verify
        if sign_mode:
            outcomes = _sign(key_store, args, keep_going)
        elif create_mode:
            outcomes = _create(key_store, force)
        elif verify_mode:
            outcomes = _verify(key_store, args, keep_going)
        else:
            click.echo(ctx.get_help())
            return
    except EdSignError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    failed = [outcome for outcome in outcomes if not outcome.ok]
    if failed:
        click.echo(f"{len(failed)} of {len(outcomes)} file(s) failed", err=True)
        ctx.exit(1)


def main():
    """Entry point for CLI."""
    cli(prog_name='edsign')


if __name__ == '__main__':
    main()
