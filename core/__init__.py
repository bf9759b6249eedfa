"""
core
----

Core scheduling engine components:

- models:  
  Immutable engine inputs (staff, duty slot types, unit constraints, config) and
  result types (assignments, day plans, statistics).

- ScheduleState:  
  The per-attempt arena holding day assignments, running staff statistics,
  the unfilled-slot counter and the diagnostic log.

- RelaxationProfile:  
  Named degrees of constraint relaxation and the ladders they are tried in.

- ConstraintManager:  
  Register eligibility rules and apply them in a controlled sequence.
"""
