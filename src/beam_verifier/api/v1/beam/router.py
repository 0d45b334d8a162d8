"""Beam API Routes - Route registration only."""

from fastapi import APIRouter

from beam_verifier.api.v1 import BEAM_PREFIX
from beam_verifier.api.v1.beam import api

router = APIRouter()
router.include_router(api.router, prefix=BEAM_PREFIX, tags=["Beam"])
