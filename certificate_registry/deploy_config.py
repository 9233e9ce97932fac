# certificate_registry/deploy_config.py

import logging
import sys
from typing import Optional

from .accounts import Account, generate_account, load_account
from .config import Settings
from .errors import RegistryError
from .host import LocalHost

logger = logging.getLogger(__name__)

TEST_CERT_HASH = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"


def resolve_deployer(settings: Settings) -> Account:
    """
    Returns the account used as deployer and signer.
    Falls back to a freshly generated account when no DEPLOYER mnemonic is configured.
    """
    if settings.deployer_mnemonic:
        return load_account(settings.deployer_mnemonic)
    logger.warning("DEPLOYER mnemonic not set; using a generated throwaway account.")
    return generate_account()


def deploy(host: LocalHost, deployer: Account) -> int:
    """
    Deploys a CertificateRegistry instance on the given host.
    Args:
        host: The execution environment to deploy to.
        deployer: The account creating the application.
    Returns:
        The app id of the deployed registry.
    """
    logger.info("Deploying CertificateRegistry...")
    receipt = host.deploy(deployer.address)

    # Wait for the deployment transaction
    confirmation = host.wait(receipt)

    logger.info(f"Registry deployed with app ID: {confirmation.app_id}")
    logger.info(f"Deployment transaction ID: {confirmation.txid} (round {confirmation.confirmed_round})")
    return confirmation.app_id


def run_smoke_test(host: LocalHost, app_id: int, deployer: Account, cert_hash: str = TEST_CERT_HASH) -> bool:
    """
    Exercises the deployed registry with a test certificate.
    Failures are logged rather than raised; returns whether every step succeeded.
    """
    try:
        logger.info(f"Registering test certificate {cert_hash}...")
        receipt = host.submit(app_id, deployer.address, "register_certificate", cert_hash)
        host.wait(receipt)
        logger.info("Certificate registered.")

        exists = host.call(app_id, "certificate_exists", cert_hash)
        logger.info(f"Certificate exists? {exists}")

        if exists:
            owner, timestamp = host.call(app_id, "get_certificate_owner", cert_hash)
            logger.info(f"Owner: {owner}")
            logger.info(f"Timestamp: {timestamp}")

        count = host.call(app_id, "get_certificate_count", deployer.address)
        logger.info(f"Deployer certificate count: {count}")
    except RegistryError as e:
        logger.error(f"Smoke test failed: {e}")
        return False
    return True


def main(settings: Optional[Settings] = None, host: Optional[LocalHost] = None) -> int:
    """Deploy, optionally smoke test, and return a process exit code."""
    try:
        settings = settings or Settings.from_env()
        logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

        host = host or LocalHost(require_algorand_addresses=settings.require_algorand_addresses)
        deployer = resolve_deployer(settings)
        logger.info(f"Network: {settings.network}")
        logger.info(f"Using deployer account: {deployer.address}")

        app_id = deploy(host, deployer)

        if settings.smoke_test:
            run_smoke_test(host, app_id, deployer)
    except Exception:
        logger.exception("Deployment failed")
        return 1

    logger.info("Deployment complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
