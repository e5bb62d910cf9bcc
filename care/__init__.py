"""Care application for the care home backend.

Models, serializers, services and views for residents, audits,
appointments, daily care, hospital transfer, social records and
moving & handling assessments.
"""
