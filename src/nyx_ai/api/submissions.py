"""Waitlist and contact form endpoints with their admin pages."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ..services.submissions import SubmissionStore
from .dependencies import get_submission_store

router = APIRouter()


class WaitlistRequest(BaseModel):
    """Waitlist signup body; validated by the store, not by the schema"""
    email: Optional[str] = None
    name: Optional[str] = None


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None


@router.post("/waitlist")
async def join_waitlist(
    body: WaitlistRequest, store: SubmissionStore = Depends(get_submission_store)
) -> dict:
    await store.add_waitlist_entry(body.email, body.name)
    return {"success": True, "message": "Thanks for joining! Check your email for confirmation."}


@router.get("/waitlist", response_class=HTMLResponse)
async def waitlist_dashboard(store: SubmissionStore = Depends(get_submission_store)) -> str:
    return await store.render_waitlist()


@router.post("/contact")
async def submit_contact(
    body: ContactRequest, store: SubmissionStore = Depends(get_submission_store)
) -> dict:
    await store.add_contact_entry(
        body.name, body.email, body.message, phone=body.phone, subject=body.subject
    )
    return {"success": True, "message": "Thanks for reaching out! We'll get back to you soon."}


@router.get("/contact", response_class=HTMLResponse)
async def contact_dashboard(store: SubmissionStore = Depends(get_submission_store)) -> str:
    return await store.render_contacts()
