# -*- coding: utf-8 -*-
"""English translations."""

EN_TRANSLATIONS = {
    # Dialogs
    "dialog.error": "Error",
    "dialog.warning": "Warning",
    "dialog.info": "Information",
    "dialog.success": "Success",
    "dialog.confirm": "Confirm",
    "dialog.close": "Close",

    # Wizard shell
    "wizard.title": "Wizard",
    "wizard.next": "Next",
    "wizard.previous": "Previous",
    "wizard.cancel": "Cancel",
    "wizard.close": "Close",
    "wizard.submit": "Submit",
    "wizard.submitting": "Submitting...",
    "wizard.retry": "Retry",
    "wizard.step_of": "Step {current} of {total}",
    "wizard.success": "Submitted successfully.",

    # List states
    "state.idle": "Complete the filters above to see results.",
    "state.loading": "Loading...",
    "state.error": "Could not load data",
    "state.empty": "Nothing to show",

    # Error Messages - API
    "error.api.timeout": "The server took too long to respond. Please try again.",
    "error.api.connection": "Cannot reach the server. Check your connection and try again.",
    "error.unexpected": "Something went wrong. Please try again.",
    "error.contact_email": "Write to {email} and include your student code.",

    # Error actions
    "error.action.retry": "Try again",
    "error.action.contact": "Contact support",
    "error.action.navigate": "Go",
    "error.action.unauthorized": "Sign in again",
    "error.action.trf_class_full": "Choose another class",
    "error.action.trf_concurrent_update": "Reload options",
    "error.action.trf_class_status": "Choose another class",
    "error.action.trf_invalid_date": "Change date",
    "error.action.trf_past_date": "Change date",
    "error.action.request_reason_too_short": "Edit reason",

    # Transfer rejections
    "transfer.error.trf_quota_exceeded": "You have used all transfers allowed for this course.",
    "transfer.error.trf_pending_exists": "You already have a pending transfer request for this class.",
    "transfer.error.trf_class_full": "The target class has just become full. Please choose another class.",
    "transfer.error.trf_invalid_date": "The effective date is not a class day of the target class.",
    "transfer.error.trf_past_date": "The effective date cannot be in the past.",
    "transfer.error.trf_tier_violation": "This transfer needs approval from academic affairs.",
    "transfer.error.trf_same_class": "The target class is the class you are already in.",
    "transfer.error.trf_different_course": "You can only transfer to a class of the same course.",
    "transfer.error.trf_class_status": "The target class is no longer open for transfers.",
    "transfer.error.trf_concurrent_update": "The class changed while you were filling the form. Please review your choice.",
    "transfer.error.validation_failed": "Some information is invalid. Please review the form.",
    "transfer.error.validation_failed_details": "Some information is invalid:\n{details}",
    "transfer.error.request_reason_too_short": "The reason is too short.",
    "transfer.error.network_error": "Cannot reach the server. Check your connection and try again.",
    "transfer.error.unauthorized": "Your session has expired. Please sign in again.",
    "transfer.error.forbidden": "You do not have permission to do this.",
    "transfer.error.not_found": "The requested record no longer exists.",
    "transfer.error.internal_server_error": "The server failed to process the request. Please try again later.",
    "transfer.error.unknown_error": "An unexpected error occurred. Please try again.",

    # Validation
    "validation.check_data": "Please check the entered data.",
    "validation.enrollment.required": "Choose the class you want to transfer from.",
    "validation.transfer_type.required": "Choose the kind of change you need.",
    "validation.student.required": "Choose a student.",
    "validation.current_class.required": "Choose the student's current class.",
    "validation.target.required": "Choose a target class.",
    "validation.session.required": "Choose the first session in the new class.",
    "validation.date.required": "The effective date is required.",
    "validation.date.invalid": "The effective date is not a valid date.",
    "validation.date.past": "The effective date cannot be in the past.",
    "validation.date.no_session": "The target class has no session on that date.",
    "validation.date.not_class_day": "The effective date must be a class day ({schedule}).",
    "validation.date.too_far": "The effective date must be within {days} days.",
    "validation.reason.required": "Please give a reason.",
    "validation.reason.too_short": "The reason must be at least {min} characters.",
    "validation.override.required": "The target class is full: a capacity override is required.",
    "validation.ack.terms": "Please accept the transfer terms.",
    "validation.ack.quota": "Please acknowledge that this uses one of your transfers.",
    "validation.ack.content_gap": "Please acknowledge the content you may miss.",
    "validation.import.class_required": "No class selected for the import.",
    "validation.import.file_required": "Choose a roster file.",
    "validation.import.preview_required": "Wait for the roster preview.",
    "validation.import.blocked": "This roster cannot be imported into the class.",
    "validation.import.no_valid_rows": "The roster has no valid rows.",
    "validation.import.strategy_required": "Choose an enrollment strategy.",
    "validation.import.partial_selection": "Select at least one student for partial enrollment.",
    "validation.import.partial_existing_only": "Partial enrollment only applies to existing students; select at least one row matched to a student.",

    # Transfer - blocked selections
    "transfer.blocked.pending": "A transfer request for this class is already pending.",
    "transfer.blocked.quota": "No transfers left for this course.",
    "transfer.blocked.not_eligible": "This class is not eligible for transfer.",
    "transfer.blocked.target_unavailable": "This class is not available for transfer.",
    "transfer.blocked.modality_not_allowed": "This modality is not available from the current class.",

    # Transfer wizard
    "transfer.wizard.title": "Class transfer request",
    "transfer.on_behalf.title": "Transfer on behalf of a student",
    "transfer.submit": "Submit request",
    "transfer.success": "Transfer request #{request_id} submitted.",
    "transfer.step.eligibility": "Current class",
    "transfer.step.eligibility.description": "Choose the class you want to leave.",
    "transfer.step.transfer_type": "Kind of change",
    "transfer.step.target_class": "New class",
    "transfer.step.target_class.description": "Choose a class of the same course and the first session you will attend.",
    "transfer.step.confirmation": "Confirmation",
    "transfer.step.contact_support": "Contact academic affairs",
    "transfer.step.student_search": "Student",
    "transfer.step.current_class": "Current class",
    "transfer.type.schedule": "Change schedule (same branch and modality)",
    "transfer.type.branch-modality": "Change branch or learning modality",
    "transfer.contact_support.message": "Branch and modality changes are handled by academic affairs. Please write to {email}.",
    "transfer.quota.remaining": "{remaining}/{limit} transfers left",
    "transfer.eligibility.empty": "No class can be transferred right now",
    "transfer.options.empty": "No class available",
    "transfer.options.empty_hint": "There is currently no other class of this course you can move to.",
    "transfer.option.full": "Full",
    "transfer.option.slots": "{available}/{capacity} seats",
    "transfer.session.title": "First session",
    "transfer.session.first_session": "Session",
    "transfer.gap.title": "Content gap",
    "transfer.gap.none": "No content gap",
    "transfer.gap.minor": "Minor gap",
    "transfer.gap.moderate": "Moderate gap",
    "transfer.gap.major": "Major gap",
    "transfer.gap.unknown": "Gap unknown",
    "transfer.reason.label": "Reason",
    "transfer.reason.placeholder": "At least {min} characters",
    "transfer.note.placeholder": "Note for the student (optional)",
    "transfer.ack.terms_accepted": "I accept the transfer terms.",
    "transfer.ack.quota_acknowledged": "I understand this uses one of my transfers.",
    "transfer.ack.content_gap_acknowledged": "I understand I may miss some content.",
    "transfer.summary.student": "Student: {student}",
    "transfer.summary.current": "From: {current}",
    "transfer.summary.target": "To: {target}",
    "transfer.summary.effective_date": "Effective: {date}",
    "transfer.students.search_hint": "Name, code, email or phone ({min}+ characters)",
    "transfer.students.empty": "No student found",
    "transfer.filters.title": "Change",
    "transfer.filters.schedule": "Schedule",
    "transfer.filters.branch": "Branch",
    "transfer.filters.modality": "Modality",
    "transfer.override.title": "Capacity override",
    "transfer.override.enable": "Enroll above capacity",
    "transfer.override.reason": "Override reason",
    "transfer.override.reason_hint": "At least {min} characters",

    # Enrollment import
    "import.wizard.title": "Import enrollments",
    "import.submit": "Enroll",
    "import.success": "{enrolled} students enrolled, {sessions} session records created.",
    "import.step.upload": "Roster file",
    "import.step.upload.description": "Upload an Excel or CSV roster. The server checks every row before anything is saved.",
    "import.step.preview": "Preview",
    "import.step.confirm": "Confirm",
    "import.file.none": "No file chosen",
    "import.file.browse": "Choose file",
    "import.file.filter": "Rosters (*.xlsx *.xls *.csv)",
    "import.preview.loading": "Checking roster...",
    "import.preview.summary": "{total} rows: {found} existing, {create} new, {duplicate} duplicates, {error} errors",
    "import.capacity": "{enrolled}/{capacity} enrolled, {available} seats left",
    "import.recommendation.ok": "Fits",
    "import.recommendation.partial_suggested": "Partial enrollment suggested",
    "import.recommendation.override_available": "Override available",
    "import.recommendation.blocked": "Blocked",
    "import.strategy.label": "Strategy",
    "import.strategy.all": "Enroll all valid rows",
    "import.strategy.partial": "Enroll selected rows",
    "import.strategy.override": "Enroll all above capacity",
    "import.column.select": "",
    "import.column.name": "Name",
    "import.column.email": "Email",
    "import.column.status": "Status",
    "import.column.message": "Message",
    "import.row.not_enrollable": "This row cannot be enrolled.",
    "import.override.reason": "Override reason (at least {min} characters)",
    "import.confirm.summary": "{count} students will be enrolled in {class_code} ({strategy}).",
}
