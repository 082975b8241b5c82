# -*- coding: utf-8 -*-
"""Vietnamese translations. Missing keys fall back to English."""

VI_TRANSLATIONS = {
    # Dialogs
    "dialog.error": "Lỗi",
    "dialog.warning": "Cảnh báo",
    "dialog.info": "Thông tin",
    "dialog.success": "Thành công",
    "dialog.confirm": "Xác nhận",
    "dialog.close": "Đóng",

    # Wizard shell
    "wizard.next": "Tiếp tục",
    "wizard.previous": "Quay lại",
    "wizard.cancel": "Hủy",
    "wizard.close": "Đóng",
    "wizard.submit": "Gửi",
    "wizard.submitting": "Đang gửi...",
    "wizard.retry": "Thử lại",
    "wizard.step_of": "Bước {current}/{total}",
    "wizard.success": "Đã gửi thành công.",

    # List states
    "state.idle": "Hoàn tất bộ lọc phía trên để xem kết quả.",
    "state.loading": "Đang tải...",
    "state.error": "Không tải được dữ liệu",
    "state.empty": "Không có dữ liệu",

    # Error Messages - API
    "error.api.timeout": "Máy chủ phản hồi quá lâu. Vui lòng thử lại.",
    "error.api.connection": "Không kết nối được máy chủ. Kiểm tra kết nối và thử lại.",
    "error.unexpected": "Đã có lỗi xảy ra. Vui lòng thử lại.",
    "error.contact_email": "Gửi email tới {email} kèm mã học viên của bạn.",

    # Error actions
    "error.action.retry": "Thử lại",
    "error.action.contact": "Liên hệ hỗ trợ",
    "error.action.navigate": "Đi tới",
    "error.action.unauthorized": "Đăng nhập lại",
    "error.action.trf_class_full": "Chọn lớp khác",
    "error.action.trf_concurrent_update": "Tải lại danh sách",
    "error.action.trf_class_status": "Chọn lớp khác",
    "error.action.trf_invalid_date": "Đổi ngày",
    "error.action.trf_past_date": "Đổi ngày",
    "error.action.request_reason_too_short": "Sửa lý do",

    # Transfer rejections
    "transfer.error.trf_quota_exceeded": "Bạn đã dùng hết số lần chuyển lớp của khóa học này.",
    "transfer.error.trf_pending_exists": "Bạn đã có một yêu cầu chuyển lớp đang chờ duyệt cho lớp này.",
    "transfer.error.trf_class_full": "Lớp đích vừa hết chỗ. Vui lòng chọn lớp khác.",
    "transfer.error.trf_invalid_date": "Ngày hiệu lực không phải ngày học của lớp đích.",
    "transfer.error.trf_past_date": "Ngày hiệu lực không được ở quá khứ.",
    "transfer.error.trf_tier_violation": "Yêu cầu này cần phòng Đào tạo phê duyệt.",
    "transfer.error.trf_same_class": "Lớp đích trùng với lớp hiện tại.",
    "transfer.error.trf_different_course": "Chỉ được chuyển sang lớp cùng khóa học.",
    "transfer.error.trf_class_status": "Lớp đích không còn nhận chuyển lớp.",
    "transfer.error.trf_concurrent_update": "Lớp đã thay đổi trong lúc bạn điền biểu mẫu. Vui lòng chọn lại.",
    "transfer.error.validation_failed": "Một số thông tin không hợp lệ. Vui lòng kiểm tra lại.",
    "transfer.error.validation_failed_details": "Một số thông tin không hợp lệ:\n{details}",
    "transfer.error.request_reason_too_short": "Lý do quá ngắn.",
    "transfer.error.network_error": "Không kết nối được máy chủ. Kiểm tra kết nối và thử lại.",
    "transfer.error.unauthorized": "Phiên đăng nhập đã hết hạn. Vui lòng đăng nhập lại.",
    "transfer.error.forbidden": "Bạn không có quyền thực hiện thao tác này.",
    "transfer.error.not_found": "Bản ghi không còn tồn tại.",
    "transfer.error.internal_server_error": "Máy chủ không xử lý được yêu cầu. Vui lòng thử lại sau.",
    "transfer.error.unknown_error": "Đã có lỗi không mong muốn. Vui lòng thử lại.",

    # Validation
    "validation.check_data": "Vui lòng kiểm tra dữ liệu đã nhập.",
    "validation.enrollment.required": "Chọn lớp bạn muốn chuyển đi.",
    "validation.transfer_type.required": "Chọn loại thay đổi.",
    "validation.student.required": "Chọn học viên.",
    "validation.current_class.required": "Chọn lớp hiện tại của học viên.",
    "validation.target.required": "Chọn lớp đích.",
    "validation.session.required": "Chọn buổi học đầu tiên ở lớp mới.",
    "validation.date.required": "Cần có ngày hiệu lực.",
    "validation.date.invalid": "Ngày hiệu lực không hợp lệ.",
    "validation.date.past": "Ngày hiệu lực không được ở quá khứ.",
    "validation.date.no_session": "Lớp đích không có buổi học vào ngày này.",
    "validation.date.not_class_day": "Ngày hiệu lực phải là ngày học ({schedule}).",
    "validation.date.too_far": "Ngày hiệu lực phải trong vòng {days} ngày.",
    "validation.reason.required": "Vui lòng nhập lý do.",
    "validation.reason.too_short": "Lý do phải có ít nhất {min} ký tự.",
    "validation.override.required": "Lớp đích đã đầy: cần vượt sĩ số.",
    "validation.ack.terms": "Vui lòng đồng ý với điều khoản chuyển lớp.",
    "validation.ack.quota": "Vui lòng xác nhận yêu cầu này dùng một lượt chuyển lớp.",
    "validation.ack.content_gap": "Vui lòng xác nhận bạn có thể bỏ lỡ một số nội dung.",
    "validation.import.class_required": "Chưa chọn lớp để nhập danh sách.",
    "validation.import.file_required": "Chọn tệp danh sách.",
    "validation.import.preview_required": "Chờ xem trước danh sách.",
    "validation.import.blocked": "Không thể nhập danh sách này vào lớp.",
    "validation.import.no_valid_rows": "Danh sách không có dòng hợp lệ.",
    "validation.import.strategy_required": "Chọn cách ghi danh.",
    "validation.import.partial_selection": "Chọn ít nhất một học viên để ghi danh một phần.",
    "validation.import.partial_existing_only": "Ghi danh một phần chỉ áp dụng cho học viên đã có; chọn ít nhất một dòng đã khớp với học viên.",

    # Transfer - blocked selections
    "transfer.blocked.pending": "Lớp này đang có yêu cầu chuyển lớp chờ duyệt.",
    "transfer.blocked.quota": "Đã hết lượt chuyển lớp của khóa học.",
    "transfer.blocked.not_eligible": "Lớp này không đủ điều kiện chuyển.",
    "transfer.blocked.target_unavailable": "Lớp này không nhận chuyển lớp.",
    "transfer.blocked.modality_not_allowed": "Không thể chuyển sang hình thức học này từ lớp hiện tại.",

    # Transfer wizard
    "transfer.wizard.title": "Yêu cầu chuyển lớp",
    "transfer.on_behalf.title": "Chuyển lớp cho học viên",
    "transfer.submit": "Gửi yêu cầu",
    "transfer.success": "Đã gửi yêu cầu chuyển lớp #{request_id}.",
    "transfer.step.eligibility": "Lớp hiện tại",
    "transfer.step.eligibility.description": "Chọn lớp bạn muốn rời.",
    "transfer.step.transfer_type": "Loại thay đổi",
    "transfer.step.target_class": "Lớp mới",
    "transfer.step.target_class.description": "Chọn lớp cùng khóa học và buổi học đầu tiên bạn sẽ tham gia.",
    "transfer.step.confirmation": "Xác nhận",
    "transfer.step.contact_support": "Liên hệ phòng Đào tạo",
    "transfer.step.student_search": "Học viên",
    "transfer.step.current_class": "Lớp hiện tại",
    "transfer.type.schedule": "Đổi lịch học (cùng chi nhánh và hình thức)",
    "transfer.type.branch-modality": "Đổi chi nhánh hoặc hình thức học",
    "transfer.contact_support.message": "Việc đổi chi nhánh hoặc hình thức học do phòng Đào tạo xử lý. Vui lòng gửi thư tới {email}.",
    "transfer.quota.remaining": "Còn {remaining}/{limit} lượt chuyển",
    "transfer.eligibility.empty": "Hiện không có lớp nào có thể chuyển",
    "transfer.options.empty": "Không có lớp phù hợp",
    "transfer.options.empty_hint": "Hiện chưa có lớp nào khác của khóa học này để chuyển sang.",
    "transfer.option.full": "Đã đầy",
    "transfer.option.slots": "{available}/{capacity} chỗ",
    "transfer.session.title": "Buổi học đầu tiên",
    "transfer.session.first_session": "Buổi học",
    "transfer.gap.title": "Chênh lệch nội dung",
    "transfer.gap.none": "Không chênh lệch",
    "transfer.gap.minor": "Chênh lệch ít",
    "transfer.gap.moderate": "Chênh lệch vừa",
    "transfer.gap.major": "Chênh lệch nhiều",
    "transfer.gap.unknown": "Chưa rõ chênh lệch",
    "transfer.reason.label": "Lý do",
    "transfer.reason.placeholder": "Ít nhất {min} ký tự",
    "transfer.note.placeholder": "Ghi chú cho học viên (không bắt buộc)",
    "transfer.ack.terms_accepted": "Tôi đồng ý với điều khoản chuyển lớp.",
    "transfer.ack.quota_acknowledged": "Tôi hiểu yêu cầu này dùng một lượt chuyển lớp.",
    "transfer.ack.content_gap_acknowledged": "Tôi hiểu có thể bỏ lỡ một số nội dung.",
    "transfer.summary.student": "Học viên: {student}",
    "transfer.summary.current": "Từ: {current}",
    "transfer.summary.target": "Đến: {target}",
    "transfer.summary.effective_date": "Hiệu lực: {date}",
    "transfer.students.search_hint": "Tên, mã, email hoặc số điện thoại (từ {min} ký tự)",
    "transfer.students.empty": "Không tìm thấy học viên",
    "transfer.filters.title": "Thay đổi",
    "transfer.filters.schedule": "Lịch học",
    "transfer.filters.branch": "Chi nhánh",
    "transfer.filters.modality": "Hình thức",
    "transfer.override.title": "Vượt sĩ số",
    "transfer.override.enable": "Ghi danh vượt sĩ số",
    "transfer.override.reason": "Lý do vượt sĩ số",
    "transfer.override.reason_hint": "Ít nhất {min} ký tự",

    # Enrollment import
    "import.wizard.title": "Nhập danh sách ghi danh",
    "import.submit": "Ghi danh",
    "import.success": "Đã ghi danh {enrolled} học viên, tạo {sessions} bản ghi buổi học.",
    "import.step.upload": "Tệp danh sách",
    "import.step.upload.description": "Tải lên danh sách Excel hoặc CSV. Máy chủ kiểm tra từng dòng trước khi lưu.",
    "import.step.preview": "Xem trước",
    "import.step.confirm": "Xác nhận",
    "import.file.none": "Chưa chọn tệp",
    "import.file.browse": "Chọn tệp",
    "import.file.filter": "Danh sách (*.xlsx *.xls *.csv)",
    "import.preview.loading": "Đang kiểm tra danh sách...",
    "import.preview.summary": "{total} dòng: {found} đã có, {create} mới, {duplicate} trùng, {error} lỗi",
    "import.capacity": "Đã ghi danh {enrolled}/{capacity}, còn {available} chỗ",
    "import.recommendation.ok": "Đủ chỗ",
    "import.recommendation.partial_suggested": "Nên ghi danh một phần",
    "import.recommendation.override_available": "Có thể vượt sĩ số",
    "import.recommendation.blocked": "Bị chặn",
    "import.strategy.label": "Cách ghi danh",
    "import.strategy.all": "Ghi danh tất cả dòng hợp lệ",
    "import.strategy.partial": "Ghi danh các dòng đã chọn",
    "import.strategy.override": "Ghi danh tất cả, vượt sĩ số",
    "import.column.name": "Họ tên",
    "import.column.email": "Email",
    "import.column.status": "Trạng thái",
    "import.column.message": "Ghi chú",
    "import.row.not_enrollable": "Không thể ghi danh dòng này.",
    "import.override.reason": "Lý do vượt sĩ số (ít nhất {min} ký tự)",
    "import.confirm.summary": "Sẽ ghi danh {count} học viên vào lớp {class_code} ({strategy}).",
}
