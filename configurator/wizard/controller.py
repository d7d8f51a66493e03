"""
Configuration Controller
========================

Owns one buyer's wizard session: every selection, the step position and
the derived pricing. Views read `snapshot()` and call the operations below;
nothing else touches session state.

Flow:
1. Controller is built from the package, its catalog and a currency context
2. Buyer toggles features/add-ons, sets usage, picks plan and support
3. Every operation swaps in a new ConfigurationState and recomputes pricing
4. advance()/retreat() validate the step being left and move, after a
   short save-and-continue delay surfaced as a busy flag
5. On Review & Confirm, save() hands a SavePayload to the persistence
   collaborator

A disposed session ignores navigation that completes after teardown.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Protocol

from configurator.config import ConfiguratorConfig
from configurator.exceptions import (
    PersistenceError,
    SessionBusyError,
    SessionDisposedError,
    ValidationError,
)
from configurator.models.catalog import AddOn, Catalog, Feature, Package
from configurator.models.state import (
    ConfigurationState,
    ContactDetails,
    PricingState,
    SavePayload,
)
from configurator.pricing.currency import CurrencyContext
from configurator.pricing.engine import PricingEngine
from configurator.pricing.selection import set_quantity, toggle_item
from configurator.wizard import enterprise, matrix
from configurator.wizard.steps import WizardStep, steps_for
from configurator.wizard.validation import validate_step

logger = logging.getLogger(__name__)


class SelectionPersistence(Protocol):
    """Anything that can accept a package selection request."""

    async def submit_selection(self, request: Dict[str, Any]) -> Any:
        ...


@dataclass(frozen=True)
class StepResult:
    """Outcome of a navigation attempt."""
    ok: bool
    step: int
    error: Optional[ValidationError] = None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""


@dataclass(frozen=True)
class ConfiguratorSnapshot:
    """Read-only view of a session for rendering."""
    config: ConfigurationState
    pricing: PricingState
    busy: bool
    back_busy: bool
    saving: bool
    last_error: Optional[str]
    active_enterprise_category: Optional[enterprise.EnterpriseCategory]
    can_continue: bool


class ConfigurationController:
    """
    Wizard state machine and selection rules for one package session.

    Args:
        package: The package being configured
        catalog: Features, add-ons and usage tiers offered for it
        currency: Display currency and exchange rate
        persistence: Collaborator receiving the confirmed selection
        config: Configurator settings (step delay, default currency)
        initial_step: Step index to open on
    """

    def __init__(
        self,
        package: Package,
        catalog: Optional[Catalog] = None,
        currency: Optional[CurrencyContext] = None,
        persistence: Optional[SelectionPersistence] = None,
        config: Optional[ConfiguratorConfig] = None,
        initial_step: int = 0,
        session_id: Optional[str] = None,
    ):
        self.config = config or ConfiguratorConfig()
        self.package = package
        self.catalog = catalog or Catalog.empty()
        self.currency = currency or CurrencyContext(code=self.config.default_currency)
        self.persistence = persistence
        self.session_id = session_id or uuid.uuid4().hex[:12]

        steps = steps_for(package.is_customizable)
        customizable = package.is_customizable

        self._state = ConfigurationState(
            steps=steps,
            current_step=max(0, min(initial_step, len(steps) - 1)),
            usage_quantities=self.catalog.default_usage_quantities() if customizable else {},
            enterprise_features=None if customizable else enterprise.default_enterprise_flags(),
            checkbox_matrix={} if customizable else matrix.build_matrix(self.catalog.add_ons),
            currency=self.currency.code,
        )

        self.engine = PricingEngine(self.catalog, package.price, self.currency.code)
        self.engine.recompute(self._state)

        self.busy = False
        self.back_busy = False
        self.saving = False
        self.last_error: Optional[str] = None
        self._disposed = False

        logger.info(
            f"Started configuration session {self.session_id} for package {package.id} "
            f"({len(steps)} steps, customizable={customizable})",
            extra=self._log_extra(),
        )

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def state(self) -> ConfigurationState:
        return self._state

    @property
    def pricing(self) -> PricingState:
        return self.engine.state

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def current_step(self) -> WizardStep:
        return WizardStep(self._state.current_step_name)

    def snapshot(self) -> ConfiguratorSnapshot:
        return ConfiguratorSnapshot(
            config=self._state,
            pricing=self.engine.state,
            busy=self.busy,
            back_busy=self.back_busy,
            saving=self.saving,
            last_error=self.last_error,
            active_enterprise_category=enterprise.active_category(self._state.enterprise_features),
            can_continue=self.can_continue(),
        )

    def _log_extra(self) -> Dict[str, Any]:
        extra = {"session_id": self.session_id, "package_id": self.package.id}
        if hasattr(self, "_state"):
            extra["step"] = self._state.current_step_name.value
        return extra

    def _ensure_active(self):
        if self._disposed:
            raise SessionDisposedError(f"Configuration session {self.session_id} has been disposed")

    def _apply(self, **changes) -> ConfigurationState:
        """Swap in a new state and bring pricing up to date."""
        self._state = replace(self._state, **changes)
        self.engine.recompute(self._state)
        return self._state

    # =========================================================================
    # Selection operations
    # =========================================================================

    def toggle_feature(self, feature: Feature) -> ConfigurationState:
        self._ensure_active()
        return self._apply(selected_features=toggle_item(feature, self._state.selected_features))

    def toggle_add_on(self, add_on: AddOn) -> ConfigurationState:
        self._ensure_active()
        return self._apply(selected_add_ons=toggle_item(add_on, self._state.selected_add_ons))

    def set_usage_quantity(self, tier_id: int, raw_value: Any) -> ConfigurationState:
        """Set a usage quantity from free-text input. Bounds are checked on advance."""
        self._ensure_active()
        return self._apply(
            usage_quantities=set_quantity(tier_id, raw_value, self._state.usage_quantities)
        )

    def select_plan(self, index: int) -> ConfigurationState:
        """Choose a billing plan; choosing the current plan again clears it."""
        self._ensure_active()
        new_index, _ = self.engine.select_plan(self._state, index)
        self._state = replace(self._state, selected_plan_index=new_index)
        return self._state

    def select_support(self, index: int) -> ConfigurationState:
        """Choose a support tier; choosing the current tier again clears it."""
        self._ensure_active()
        new_index, _ = self.engine.select_support(self._state, index)
        self._state = replace(self._state, selected_support_index=new_index)
        return self._state

    def toggle_enterprise_feature(self, feature_key: str) -> bool:
        """
        Toggle an enterprise flag.

        Returns False when the toggle was refused because another
        category is active (or the package has no enterprise options).
        """
        self._ensure_active()
        current = self._state.enterprise_features
        updated = enterprise.toggle_enterprise_feature(current, feature_key)
        if updated is current:
            logger.debug(f"Enterprise toggle refused for {feature_key}", extra=self._log_extra())
            return False
        self._apply(enterprise_features=updated)
        return True

    def is_enterprise_category_disabled(self, category: enterprise.EnterpriseCategory | str) -> bool:
        return enterprise.is_category_disabled(self._state.enterprise_features, category)

    def is_any_enterprise_feature_selected(self) -> bool:
        return enterprise.any_enterprise_feature_selected(self._state.enterprise_features)

    def toggle_matrix_cell(self, key: str) -> ConfigurationState:
        """Toggle a plan-tier cell; every other cell in the grid is cleared."""
        self._ensure_active()
        return self._apply(checkbox_matrix=matrix.toggle_cell(self._state.checkbox_matrix, key))

    def is_any_matrix_cell_selected(self) -> bool:
        return matrix.any_cell_selected(self._state.checkbox_matrix)

    def set_currency(self, code: str, rate: float = 1.0) -> PricingState:
        """Switch display currency; unit prices are re-resolved for it."""
        self._ensure_active()
        self.currency = self.currency.with_currency(code, rate)
        self._state = replace(self._state, currency=code)
        return self.engine.set_currency(self._state)

    def update_contact(self, **fields: str) -> ContactDetails:
        """
        Update contact form fields by name.

        Raises:
            ValidationError: Unknown field name
        """
        self._ensure_active()
        known = ContactDetails.model_fields
        for name in fields:
            if name not in known:
                raise ValidationError(
                    f"Unknown contact field: {name}",
                    step=WizardStep.REVIEW.value,
                    field=name,
                )
        contact = self._state.contact.model_copy(update=fields)
        self._state = replace(self._state, contact=contact)
        return contact

    # =========================================================================
    # Navigation
    # =========================================================================

    def validate_current_step(self) -> Optional[ValidationError]:
        try:
            validate_step(self._state, self.catalog, self.package.is_customizable)
        except ValidationError as e:
            return e
        return None

    def can_continue(self) -> bool:
        """Whether the continue action is enabled on the current step."""
        if self.busy or self.saving:
            return False
        return self.validate_current_step() is None

    def _blocked_result(self) -> Optional[StepResult]:
        error = self.validate_current_step()
        if error is None:
            return None
        self.last_error = error.message
        logger.warning(f"Cannot leave step: {error.message}", extra=self._log_extra())
        return StepResult(ok=False, step=self._state.current_step, error=error)

    async def advance(self) -> StepResult:
        """
        Validate the current step and move forward one step.

        Validation failures leave the step unchanged and are reported in
        the result (and in last_error).
        """
        self._ensure_active()
        if self.busy or self.back_busy or self.saving:
            return StepResult(ok=False, step=self._state.current_step)

        blocked = self._blocked_result()
        if blocked is not None:
            return blocked

        self.last_error = None
        self.busy = True
        try:
            await asyncio.sleep(self.config.step_delay_seconds)
        finally:
            self.busy = False

        if self._disposed:
            logger.debug(f"Session {self.session_id} disposed during advance; ignoring", extra=self._log_extra())
            return StepResult(ok=False, step=self._state.current_step)

        # selections may have changed while waiting
        blocked = self._blocked_result()
        if blocked is not None:
            return blocked

        previous = self._state.current_step
        next_step = min(previous + 1, len(self._state.steps) - 1)
        self._state = replace(self._state, current_step=next_step)
        logger.info(f"Navigating from step {previous} to step {next_step}", extra=self._log_extra())
        return StepResult(ok=True, step=next_step)

    async def retreat(self) -> StepResult:
        """
        Move back one step.

        Going back forfeits the chosen billing plan.
        """
        self._ensure_active()
        if self.busy or self.back_busy or self.saving:
            return StepResult(ok=False, step=self._state.current_step)

        self.back_busy = True
        try:
            await asyncio.sleep(self.config.step_delay_seconds)
        finally:
            self.back_busy = False

        if self._disposed:
            logger.debug(f"Session {self.session_id} disposed during retreat; ignoring", extra=self._log_extra())
            return StepResult(ok=False, step=self._state.current_step)

        previous = self._state.current_step
        prev_step = max(previous - 1, 0)
        self._state = replace(self._state, current_step=prev_step, selected_plan_index=None)
        self.engine.clear_plan(self._state)
        self.last_error = None
        logger.info(f"Navigating back from step {previous} to step {prev_step}", extra=self._log_extra())
        return StepResult(ok=True, step=prev_step)

    def build_payload(self) -> SavePayload:
        pricing = self.engine.state
        return SavePayload(
            package_id=self.package.id,
            package_title=self.package.title,
            is_customizable=self.package.is_customizable,
            selected_features=list(self._state.selected_features),
            selected_add_ons=list(self._state.selected_add_ons),
            usage_quantities=dict(self._state.usage_quantities),
            calculated_price=pricing.total_price,
            selected_currency=self._state.currency,
            form_data=self._state.contact,
            plan_discount=pricing.plan_discount,
            support_level=self._state.selected_support_index,
            support_price=pricing.support_price,
        )

    async def save(self) -> SavePayload:
        """
        Submit the confirmed configuration.

        Only available on the final step. Every step's rule is checked
        again before submitting.

        Raises:
            ValidationError: Not on the final step, or a step rule fails
            PersistenceError: The collaborator rejected the submission;
                the session is left intact for another attempt
            SessionBusyError: A save or step change is already in flight
        """
        self._ensure_active()
        if self.saving or self.busy or self.back_busy:
            raise SessionBusyError(f"Configuration session {self.session_id} is busy")
        if not self._state.is_last_step:
            raise ValidationError(
                f"Configuration can only be saved from {WizardStep.REVIEW.value}.",
                step=self._state.current_step_name.value,
            )

        for step in self._state.steps:
            try:
                validate_step(self._state, self.catalog, self.package.is_customizable, step=step)
            except ValidationError as e:
                self.last_error = e.message
                raise

        payload = self.build_payload()
        if self.persistence is None:
            logger.info("No persistence configured; returning payload unsaved", extra=self._log_extra())
            return payload

        self.saving = True
        try:
            logger.info(
                f"Saving package {self.package.id} at {payload.calculated_price:.2f} {payload.selected_currency}",
                extra=self._log_extra(),
            )
            await self.persistence.submit_selection(payload.to_selection_request())
        except PersistenceError as e:
            self.last_error = "Error saving package!"
            logger.error(f"Save failed: {e}", extra=self._log_extra())
            raise
        except Exception as e:
            self.last_error = "Error saving package!"
            logger.error(f"Save failed: {e}", extra=self._log_extra())
            raise PersistenceError(f"Failed to save package selection: {e}") from e
        finally:
            self.saving = False

        if self._disposed:
            logger.debug(f"Session {self.session_id} disposed during save", extra=self._log_extra())
        else:
            self.last_error = None
            logger.info("Package saved successfully", extra=self._log_extra())
        return payload

    def dispose(self):
        """Tear down the session. Later completions are ignored."""
        if not self._disposed:
            self._disposed = True
            logger.info(f"Disposed configuration session {self.session_id}", extra=self._log_extra())
