"""QRGuard models package.

Defines the data contracts shared by the classifier, the analyzers and the
outer surfaces:

  - payload.py   PayloadType, the per-type payload records, DecodedPayload
  - security.py  SecurityStatus, SecurityCheck, SecurityAnalysisResult
  - report.py    ReportSubmission record handed to the external report store
"""
