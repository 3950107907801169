from .transcript_models import (
    SubjectRecord,
    TranscriptRecord,
    SemesterKey,
    SemesterAggregate,
    SequencedTerm,
    FutureTermSpec,
    ProjectionInputPayload,
    SimulationResult,
    PersistenceRow,
    RowFailure,
    SaveOutcome,
)

__all__ = [
    "SubjectRecord",
    "TranscriptRecord",
    "SemesterKey",
    "SemesterAggregate",
    "SequencedTerm",
    "FutureTermSpec",
    "ProjectionInputPayload",
    "SimulationResult",
    "PersistenceRow",
    "RowFailure",
    "SaveOutcome",
]
