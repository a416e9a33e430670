"""RefundHunter Backend Package.

This package provides the FastAPI backend for auditing inventory-adjustment
exports and producing validated reimbursement claims, including:

- Header alias resolution for vendor spreadsheets
- Delimited text normalization into canonical rows
- Eligibility rules for loss/damage/adjustment events
- Claim validation for internal and LLM-produced candidates
- Totals and reimbursement message drafts

Usage:
    # Development (from project root):
    uvicorn refundhunter.app:app --reload --port 8080

    # Library use:
    from refundhunter.pipeline import AuditPipeline
    result = AuditPipeline().run(csv_text)

Modules:
    app: FastAPI application entry point
    pipeline: End-to-end audit orchestration
    mapping: Header alias tables and resolution
    parsers: Delimited text parsing and row normalization
    rules: Eligibility classifier and signal rules
    validation: Claim validation
    audit: Totals and message drafts
    classifier_client: Claude API integration for claim enrichment
    classifier_config: Claim classifier persona configuration
"""

__version__ = "0.3.0"
