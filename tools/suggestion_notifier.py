# tools/suggestion_notifier.py
"""
CalorieBuddy AI — Food Suggestion Notifier
==========================================
Forwards a "suggest a food" request to the notification webhook, which
delivers it by email.
"""

import os
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv

# =============================================================================
# CONFIGURATION
# =============================================================================
load_dotenv()

NOTIFIER_CONFIG = {
    "webhook_url": os.getenv("SUGGESTION_WEBHOOK_URL"),
    "timeout": 10,
}


# =============================================================================
# MAIN TOOL: submit_food_suggestion
# =============================================================================
def submit_food_suggestion(
    food_name: Optional[str],
    comment: Optional[str] = None,
    webhook_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Send a food suggestion to the notification collaborator.

    Args:
        food_name: Food the user wants added. Required.
        comment: Optional note from the user.
        webhook_url: Overrides SUGGESTION_WEBHOOK_URL.

    Returns:
        {"status": "success", "food_name": ...} or
        {"status": "error", "error_message": ...}
    """
    name = (food_name or "").strip()
    if not name:
        return {
            "status": "error",
            "error_message": "Food name is required",
        }

    url = webhook_url or NOTIFIER_CONFIG["webhook_url"]
    if not url:
        print("⚠️ Suggestion Notifier: SUGGESTION_WEBHOOK_URL not set")
        return {
            "status": "error",
            "error_message": "Suggestion service is not configured",
        }

    payload = {"foodName": name, "comment": (comment or "").strip() or None}

    try:
        response = requests.post(url, json=payload, timeout=NOTIFIER_CONFIG["timeout"])
        response.raise_for_status()
    except requests.RequestException as e:
        print(f"❌ Suggestion Notifier: delivery failed: {e}")
        return {
            "status": "error",
            "error_message": f"Failed to send suggestion: {e}",
        }

    print(f"✅ Suggestion Notifier: sent '{name}'")
    return {
        "status": "success",
        "food_name": name,
    }


__all__ = ["NOTIFIER_CONFIG", "submit_food_suggestion"]
