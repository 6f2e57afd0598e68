from __future__ import annotations

from pydantic import BaseModel

from claimdesk.modules.risk.service import RiskAssessment, RiskSeverity


class RiskSignalOut(BaseModel):
    severity: RiskSeverity
    label: str
    description: str


class RiskAssessmentOut(BaseModel):
    overall_risk: RiskSeverity
    risk_score: int
    signals: list[RiskSignalOut]

    @classmethod
    def from_assessment(cls, assessment: RiskAssessment) -> RiskAssessmentOut:
        return cls(
            overall_risk=assessment.overall_risk,
            risk_score=assessment.risk_score,
            signals=[
                RiskSignalOut(severity=s.severity, label=s.label, description=s.description)
                for s in assessment.signals
            ],
        )
