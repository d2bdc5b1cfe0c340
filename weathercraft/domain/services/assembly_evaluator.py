"""
ASSEMBLY EVALUATOR (ENGINE-3) - LABOR DECISION
Current compliance + forecast work window + lead time -> labor green light

RESPONSIBILITIES:
- AND component results for the current moment
- Scan the hourly forecast for contiguous compliant hours
- Confirm a full window exists beyond the lead-time horizon
- Produce exactly one status message

RULES:
❌ No retries
❌ No exceptions on empty or short forecasts (fall back to HOLD-leaning values)
✅ Idempotent
✅ Always explain
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from weathercraft.domain.models import (
    Assembly,
    AssemblyCatalog,
    AssemblyResult,
    ComplianceCheck,
    Component,
    ComponentResult,
    WeatherConditions,
    WorkWindow,
)
from weathercraft.domain.services.component_evaluator import ComponentEvaluator
from weathercraft.utils.numbers import fmt_number, round_half_up

logger = logging.getLogger(__name__)


class AssemblyEvaluator:
    """
    Assembly Evaluator
    Combines component checks with the work-window and lead-time scans
    """

    def __init__(self, component_evaluator: Optional[ComponentEvaluator] = None):
        self.component_evaluator = component_evaluator or ComponentEvaluator()

    def evaluate_assembly(
        self,
        assembly: Assembly,
        current: WeatherConditions,
        hourly_forecast: Optional[Sequence[WeatherConditions]] = None,
        now: Optional[datetime] = None,
    ) -> AssemblyResult:
        """
        Evaluate one assembly

        Args:
            assembly: Assembly to evaluate
            current: Normalized current conditions
            hourly_forecast: Normalized hourly forecast, hour 0 first
            now: Reference time for the next work window (defaults to UTC now)

        Returns:
            AssemblyResult with labor green light and status message
        """
        # Step 1: Current-moment compliance
        component_results = self.check_components(assembly, current)
        failing = tuple(r.component for r in component_results if not r.compliant)
        compliant = not failing

        # Step 2: Work-window scan
        forecast = list(hourly_forecast or [])
        next_window: Optional[WorkWindow] = None
        if not forecast:
            has_full_window = False
            has_lead_time = False
            window_hours = 1 if compliant else 0
        else:
            hour_ok = [self._all_compliant(assembly, hour) for hour in forecast]
            window_hours, first_start, first_length = self._scan_runs(
                hour_ok, assembly.min_work_window_hours
            )
            has_full_window = window_hours >= assembly.min_work_window_hours
            if first_start is not None:
                start_time = (now or datetime.now(timezone.utc)) + timedelta(hours=first_start)
                next_window = WorkWindow(start=start_time, duration_hours=first_length)

            # Step 3: Lead-time scan
            has_lead_time = self._has_window_after(
                hour_ok, assembly.lead_time_hours, assembly.min_work_window_hours
            )

        # Step 4: Combine
        green_light = compliant and has_full_window and has_lead_time
        message = self._status_message(
            assembly, compliant, has_full_window, has_lead_time, window_hours, failing
        )

        logger.debug(
            "Assembly %s: compliant=%s window=%sh lead=%s green=%s",
            assembly.id, compliant, window_hours, has_lead_time, green_light,
        )

        return AssemblyResult(
            assembly=assembly,
            compliant=compliant,
            component_results=component_results,
            failing_components=failing,
            has_full_work_window=has_full_window,
            has_required_lead_time=has_lead_time,
            work_window_hours=window_hours,
            labor_green_light=green_light,
            status_message=message,
            next_work_window=next_window,
        )

    def evaluate_all_assemblies(
        self,
        catalog: AssemblyCatalog,
        current: WeatherConditions,
        hourly_forecast: Optional[Sequence[WeatherConditions]] = None,
        now: Optional[datetime] = None,
    ) -> list[AssemblyResult]:
        """Evaluate every catalog assembly, preserving catalog order"""
        reference = now or datetime.now(timezone.utc)
        return [
            self.evaluate_assembly(assembly, current, hourly_forecast, reference)
            for assembly in catalog.assemblies
        ]

    def check_components(
        self,
        assembly: Assembly,
        conditions: WeatherConditions,
    ) -> tuple[ComponentResult, ...]:
        return tuple(
            self.component_evaluator.evaluate(component, conditions)
            for component in assembly.components
        )

    def is_compliant(self, assembly: Assembly, conditions: WeatherConditions) -> bool:
        """Current-moment compliance only (no forecast scan)"""
        return self._all_compliant(assembly, conditions)

    # ------------------------------------------------------------------
    # LOOKUP HELPERS
    # ------------------------------------------------------------------

    def evaluate_assembly_by_id(
        self,
        catalog: AssemblyCatalog,
        assembly_id: str,
        conditions: WeatherConditions,
    ) -> ComplianceCheck:
        """
        Current compliance for an assembly id

        Unknown ids yield a non-compliant "not found" check.
        """
        assembly = catalog.get_assembly(assembly_id)
        if assembly is None:
            return ComplianceCheck(compliant=False, reasons=(f"Assembly not found: {assembly_id}",))

        reasons = []
        for result in self.check_components(assembly, conditions):
            reasons.extend(f"{result.component.name}: {reason}" for reason in result.reasons)
        return ComplianceCheck(compliant=not reasons, reasons=tuple(reasons))

    @staticmethod
    def check_material(
        catalog: AssemblyCatalog,
        material_id: str,
        current_temp: float,
        wind_speed: float,
        precipitating: bool,
    ) -> ComplianceCheck:
        """Quick single-material check against a few raw readings"""
        material = catalog.get_material(material_id)
        if material is None:
            return ComplianceCheck(compliant=False, reasons=("Material not found",))

        constraint = material.constraint
        reasons = []
        temp = round_half_up(current_temp)
        if constraint.min_temp is not None and current_temp < constraint.min_temp:
            reasons.append(f"Temp {temp}°F is below min {fmt_number(constraint.min_temp)}°F")
        if constraint.max_temp is not None and current_temp > constraint.max_temp:
            reasons.append(f"Temp {temp}°F is above max {fmt_number(constraint.max_temp)}°F")
        if constraint.max_wind_speed is not None and wind_speed > constraint.max_wind_speed:
            reasons.append(
                f"Wind {round_half_up(wind_speed)}mph exceeds max "
                f"{fmt_number(constraint.max_wind_speed)}mph"
            )
        if constraint.no_precipitation and precipitating:
            reasons.append("Precipitation detected")

        return ComplianceCheck(compliant=not reasons, reasons=tuple(reasons))

    # ------------------------------------------------------------------
    # SCANS
    # ------------------------------------------------------------------

    def _all_compliant(self, assembly: Assembly, conditions: WeatherConditions) -> bool:
        return all(
            self.component_evaluator.is_compliant(component, conditions)
            for component in assembly.components
        )

    @staticmethod
    def _scan_runs(
        hour_ok: Sequence[bool],
        min_hours: int,
    ) -> tuple[int, Optional[int], int]:
        """
        Single pass over per-hour compliance flags

        Returns:
            (longest run, start of first run reaching min_hours, that run's length)
        """
        longest = 0
        run = 0
        first_start: Optional[int] = None
        first_length = 0

        for index, ok in enumerate(hour_ok):
            if ok:
                run += 1
                longest = max(longest, run)
                start = index - run + 1
                if first_start is None and run >= min_hours:
                    first_start = start
                if first_start == start:
                    first_length = run
            else:
                run = 0

        return longest, first_start, first_length

    @staticmethod
    def _has_window_after(
        hour_ok: Sequence[bool],
        lead_hours: int,
        min_hours: int,
    ) -> bool:
        """True once any start offset >= lead_hours opens a min_hours run"""
        if len(hour_ok) < lead_hours:
            return False

        for start in range(lead_hours, len(hour_ok) - min_hours + 1):
            if all(hour_ok[start:start + min_hours]):
                return True
        return False

    @staticmethod
    def _status_message(
        assembly: Assembly,
        compliant: bool,
        has_full_window: bool,
        has_lead_time: bool,
        window_hours: int,
        failing: Sequence[Component],
    ) -> str:
        if compliant and has_full_window and has_lead_time:
            return (
                f"GO - {window_hours}h work window confirmed with "
                f"{assembly.min_lead_time_days}-day lead time. Labor cleared."
            )
        if compliant and not has_full_window:
            return (
                f"Conditions OK now, but only {window_hours}h window "
                f"(need {assembly.min_work_window_hours}h)"
            )
        if compliant:
            return (
                f"Conditions OK now, but no {assembly.min_work_window_hours}h window "
                f"confirmed {assembly.min_lead_time_days}+ days out"
            )

        names = ", ".join(component.name for component in failing[:2])
        suffix = "..." if len(failing) > 2 else ""
        return f"HOLD - {names}{suffix} out of spec"
