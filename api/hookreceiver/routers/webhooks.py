import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from hookreceiver.config import settings
from hookreceiver.receivers.base import WebHookReceiver
from hookreceiver.schemas.webhook import Accepted, Echoed

wh_logger = logging.getLogger("webhooks")

public_router = APIRouter(prefix="/api/webhooks/incoming", tags=["webhooks-public"])

# Every method reaches the receiver so it can reject the unsupported ones itself
_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


# ---------------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------------


def get_receiver(receiver_name: str, request: Request) -> WebHookReceiver:
    """Match the ``{receiver_name}`` path segment to a registered receiver."""
    receivers: dict[str, WebHookReceiver] = request.app.state.receivers
    receiver = receivers.get(receiver_name.lower())
    if receiver is None:
        raise HTTPException(
            status_code=404,
            detail=f"No WebHook receiver is registered with the name '{receiver_name}'.",
        )
    return receiver


def _is_secure(request: Request) -> bool:
    if request.url.scheme == "https":
        return True
    forwarded_proto = request.headers.get("X-Forwarded-Proto", "")
    return forwarded_proto.split(",")[0].strip().lower() == "https"


def require_secure_connection(
    request: Request,
    receiver: WebHookReceiver = Depends(get_receiver),
) -> WebHookReceiver:
    """Refuse plain HTTP deliveries unless the HTTPS check is disabled."""
    if settings.disable_https_check or _is_secure(request):
        return receiver
    wh_logger.warning("Refused non-HTTPS request for receiver %r", receiver.name)
    raise HTTPException(
        status_code=400,
        detail=(
            f"The WebHook receiver '{receiver.name}' requires HTTPS in order to be secure. "
            "Please register a WebHook URI of type 'https'."
        ),
    )


# ---------------------------------------------------------------------------
# Public: receive webhooks
# ---------------------------------------------------------------------------


async def _receive(receiver: WebHookReceiver, receiver_id: str, request: Request):
    outcome = await receiver.receive(receiver_id, request)

    if isinstance(outcome, Accepted):
        context = outcome.context
        completed = await request.app.state.handlers.dispatch(context)
        wh_logger.info(
            "Received WebHook for %r id %r with %d action(s), %d handler(s) ran",
            context.receiver,
            context.receiver_id,
            len(context.actions),
            completed,
        )
        return {
            "status": "received",
            "receiver": context.receiver,
            "id": context.receiver_id,
            "actions": list(context.actions),
        }

    if isinstance(outcome, Echoed):
        return PlainTextResponse(outcome.echo, status_code=outcome.status_code)
    return PlainTextResponse(outcome.reason, status_code=outcome.status_code)


@public_router.api_route("/{receiver_name}", methods=_METHODS, summary="Receive a WebHook")
async def receive_webhook(
    request: Request,
    receiver: WebHookReceiver = Depends(require_secure_connection),
):
    return await _receive(receiver, "", request)


@public_router.api_route(
    "/{receiver_name}/{receiver_id}",
    methods=_METHODS,
    summary="Receive a WebHook for a receiver id",
)
async def receive_webhook_with_id(
    receiver_id: str,
    request: Request,
    receiver: WebHookReceiver = Depends(require_secure_connection),
):
    return await _receive(receiver, receiver_id, request)
