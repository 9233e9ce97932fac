import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import Settings
from .errors import AlreadyRegistered, InvalidOwner, MalformedHash, NotFound, TransactionFailed
from .hashing import CERTIFICATE_FIELDS, hash_certificate_fields, normalize_hash, verify_certificate_hash
from .host import LocalHost

logger = logging.getLogger(__name__)


# ------------------- Pydantic Models -------------------
class RegisterRequest(BaseModel):
    cert_hash: str
    caller: str


class RegistrationResponse(BaseModel):
    cert_hash: str
    owner: str
    timestamp: int
    txid: str
    round: int


class ExistsResponse(BaseModel):
    cert_hash: str
    exists: bool


class OwnerResponse(BaseModel):
    cert_hash: str
    owner: str
    timestamp: int


class CountResponse(BaseModel):
    owner: str
    count: int


class VerifyRequest(BaseModel):
    event: str
    organizer: str
    date: str
    recipient_name: str
    recipient_address: str
    cert_hash: str


class VerifyResponse(BaseModel):
    cert_hash: str
    valid: bool
    registered: bool
    owner: Optional[str] = None
    timestamp: Optional[int] = None


# ------------------- App Factory -------------------
def create_app(host: Optional[LocalHost] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around a single registry deployed on ``host``."""
    settings = settings or Settings.from_env()
    host = host or LocalHost(require_algorand_addresses=settings.require_algorand_addresses)
    app_id = host.deploy("registry-api").app_id

    app = FastAPI(
        title="Certificate Registry API",
        description="Register certificate hashes and look up their owners.",
        version="1.0.0",
    )
    app.state.host = host
    app.state.app_id = app_id

    @app.get("/")
    def root():
        return {
            "message": "Certificate Registry API. Use POST /certificates with JSON {\"cert_hash\": <hex>, \"caller\": <address>}.",
            "app_id": app_id,
        }

    @app.post("/certificates", status_code=201, response_model=RegistrationResponse)
    def register_certificate(request: RegisterRequest):
        try:
            receipt = host.submit(app_id, request.caller, "register_certificate", request.cert_hash)
            confirmation = host.wait(receipt)
        except (MalformedHash, InvalidOwner) as e:
            raise HTTPException(status_code=422, detail=str(e))
        except TransactionFailed as e:
            if isinstance(e.__cause__, AlreadyRegistered):
                raise HTTPException(status_code=409, detail=str(e.__cause__))
            raise

        record = confirmation.return_value
        return RegistrationResponse(
            cert_hash=record.cert_hash,
            owner=record.owner,
            timestamp=record.timestamp,
            txid=confirmation.txid,
            round=confirmation.confirmed_round,
        )

    @app.post("/certificates/verify", response_model=VerifyResponse)
    def verify_certificate(request: VerifyRequest):
        """Recompute the hash from the certificate details and look it up in the registry."""
        details = {field: getattr(request, field) for field in CERTIFICATE_FIELDS}
        computed = hash_certificate_fields(**details)

        response = VerifyResponse(
            cert_hash=computed,
            valid=verify_certificate_hash(details, request.cert_hash),
            registered=host.call(app_id, "certificate_exists", computed),
        )
        if response.registered:
            response.owner, response.timestamp = host.call(app_id, "get_certificate_owner", computed)
        return response

    @app.get("/certificates/{cert_hash}/exists", response_model=ExistsResponse)
    def certificate_exists(cert_hash: str):
        try:
            key = normalize_hash(cert_hash)
        except MalformedHash as e:
            raise HTTPException(status_code=422, detail=str(e))
        return ExistsResponse(cert_hash=key, exists=host.call(app_id, "certificate_exists", key))

    @app.get("/certificates/{cert_hash}", response_model=OwnerResponse)
    def get_certificate_owner(cert_hash: str):
        try:
            key = normalize_hash(cert_hash)
            owner, timestamp = host.call(app_id, "get_certificate_owner", key)
        except MalformedHash as e:
            raise HTTPException(status_code=422, detail=str(e))
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        return OwnerResponse(cert_hash=key, owner=owner, timestamp=timestamp)

    @app.get("/owners/{owner}/count", response_model=CountResponse)
    def get_certificate_count(owner: str):
        return CountResponse(owner=owner, count=host.call(app_id, "get_certificate_count", owner))

    logger.info(f"Certificate Registry API serving app {app_id}")
    return app


app = create_app()
