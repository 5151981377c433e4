"""StudyMate backend: study plans, exams and flashcard performance."""

__version__ = "1.0.0"
