"""
Wizard Session - the four-stage access/form/generating/complete flow.

Transitions:
- access -> form          validate-code returned 200
- form -> generating      required fields filled, generation request sent
- generating -> complete  generation endpoint returned 200
- generating -> form      any other outcome (form data kept for resubmission)

Failures never raise to the caller: they become an alert on the session plus an analytics event.
Nothing is retried and nothing survives the session object.
"""
import json
import time
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import requests

from wizard.analytics import AnalyticsTracker
from wizard.api_client import WeddingApiClient
from wizard.models import FormData, WizardStage, resolve_field

logger = logging.getLogger(__name__)

PURCHASE_VALUE = 15.99
PURCHASE_CURRENCY = "USD"

INVALID_CODE_ALERT = "Invalid access code. Please check your code and try again."
NETWORK_ERROR_ALERT = "Network error. Please try again."
GENERATION_ERROR_ALERT = "Error generating newspaper. Please try again."
DOWNLOAD_ERROR_ALERT = "Error downloading file. Please try again."
CHECKOUT_ERROR_ALERT = "Could not start checkout. Please try again."


class WizardStageError(RuntimeError):
    """Action is not available in the session's current stage."""


class WizardSession:
    def __init__(
        self,
        api: Optional[WeddingApiClient] = None,
        tracker: Optional[AnalyticsTracker] = None,
        alert: Optional[Callable[[str], None]] = None,
    ):
        self.api = api or WeddingApiClient.from_env()
        self.tracker = tracker or AnalyticsTracker()
        self._alert_handler = alert
        self.stage = WizardStage.ACCESS
        self.access_code = ""
        self.form_data = FormData()
        self.generated_content: Optional[Any] = None
        self.is_generating = False
        self.alerts: List[str] = []
        self.started_at: Optional[float] = None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _alert(self, message: str) -> None:
        self.alerts.append(message)
        logger.warning("Wizard alert: %s", message)
        if self._alert_handler is not None:
            self._alert_handler(message)

    def _require_stage(self, expected: WizardStage, action: str) -> None:
        if self.stage != expected:
            raise WizardStageError(f"Cannot {action} in stage '{self.stage.value}' (expected '{expected.value}')")

    # ------------------------------------------------------------------
    # stages
    # ------------------------------------------------------------------

    def start(self, page_location: str = "") -> None:
        self.tracker.track(
            "page_view",
            page_title="AI Wedding Newspaper Generator",
            page_location=page_location,
        )
        self.tracker.track("session_start")
        self.started_at = time.time()

    def submit_access_code(self, code: str) -> bool:
        """Validate the code with the backend. Returns True when the form stage is unlocked."""
        self._require_stage(WizardStage.ACCESS, "submit an access code")
        self.access_code = (code or "").strip().upper()
        self.tracker.track("access_code_attempt", code_length=len(self.access_code))

        try:
            response = self.api.validate_code(self.access_code)
        except requests.RequestException as e:
            logger.error(f"Access code validation request failed: {e}")
            self.tracker.track("access_code_error", error_type="network_error")
            self._alert(NETWORK_ERROR_ALERT)
            return False

        if not response.ok:
            self.tracker.track("access_code_error", error_type="invalid_code")
            self._alert(INVALID_CODE_ALERT)
            return False

        self.stage = WizardStage.FORM
        self.tracker.track("access_code_success", access_code=self.access_code)
        self.tracker.track("form_start", form_name="wedding_details")
        return True

    def update_field(self, name: str, value: str) -> None:
        """Set one form field by wire name (weddingDate) or attribute name (wedding_date)."""
        attribute = resolve_field(name)
        setattr(self.form_data, attribute, value)
        if value.strip():
            self.tracker.track("form_field_complete", field_name=name)

    def submit_form(self) -> bool:
        """Send the form to the generation endpoint. Returns True when the complete stage is reached."""
        self._require_stage(WizardStage.FORM, "submit the form")

        missing = self.form_data.missing_required()
        if missing:
            self.tracker.track("form_validation_error", missing_fields=missing)
            self._alert(f"Please fill in all required fields: {', '.join(missing)}")
            return False

        self.tracker.track("form_submit_attempt")
        self.is_generating = True
        self.stage = WizardStage.GENERATING

        payload = {**self.form_data.to_payload(), "accessCode": self.access_code}
        try:
            response = self.api.generate_newspaper(payload)
            if response.status_code != 200:
                raise RuntimeError("Generation failed")
            result = response.json()
        except (requests.RequestException, RuntimeError, ValueError) as e:
            logger.error(f"Newspaper generation failed: {e}")
            self.tracker.track("generation_error", error_message=str(e))
            self._alert(GENERATION_ERROR_ALERT)
            self.stage = WizardStage.FORM
            return False
        finally:
            self.is_generating = False

        self.generated_content = result
        self.stage = WizardStage.COMPLETE
        self.tracker.track("form_complete")
        self.tracker.track("newspaper_generated", access_code=self.access_code)
        return True

    def download_filename(self) -> str:
        def _part(value: str) -> str:
            return value.replace("/", "-").replace("\\", "-")
        return f"wedding-newspaper-{_part(self.form_data.bride)}-{_part(self.form_data.groom)}.json"

    def download(self, directory: Union[str, Path] = ".") -> Optional[Path]:
        """Write the generated content as pretty-printed JSON. Returns the file path, or None on failure."""
        self._require_stage(WizardStage.COMPLETE, "download")
        self.tracker.track("pdf_download_attempt")

        target = Path(directory) / self.download_filename()
        try:
            target.write_text(json.dumps(self.generated_content, indent=2), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.error(f"Download failed: {e}")
            self.tracker.track("pdf_download_error", error_message=str(e))
            self._alert(DOWNLOAD_ERROR_ALERT)
            return None

        self.tracker.track("pdf_download_success")
        self.tracker.track(
            "purchase",
            transaction_id=self.access_code,
            value=PURCHASE_VALUE,
            currency=PURCHASE_CURRENCY,
        )
        return target

    def start_checkout(self, price_id: str) -> Optional[str]:
        """Ask the backend for a Stripe checkout URL. Returns the URL, or None after alerting."""
        try:
            response = self.api.create_checkout_session(price_id)
        except requests.RequestException as e:
            logger.error(f"Checkout request failed: {e}")
            self._alert(NETWORK_ERROR_ALERT)
            return None

        if not response.ok:
            self._alert(CHECKOUT_ERROR_ALERT)
            return None

        try:
            data = response.json()
        except ValueError:
            data = None
        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            self._alert(CHECKOUT_ERROR_ALERT)
            return None
        return url

