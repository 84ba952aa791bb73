"""
MoodJournal Backend — Services Layer
=====================================

What:  The two computational components, independent of HTTP.
How:   Plain synchronous functions plus a configured singleton per module.

Service Inventory:
    - span_codec.py: SpanCodec — StyledText ⇄ FormattingSpan list
    - analytics.py:  weekly_counts, longest_streak, current_streak,
                     summarize; NoteAnalytics binds configured defaults

Neither service depends on the other; both depend only on models/.
"""
