"""Wave status enums and their one-way mapping to canonical statuses."""

import enum

from ..base import AttemptStatus, RefundStatus


class WavePaymentStatus(str, enum.Enum):
    """Checkout session / transaction status as reported by Wave."""
    CREATED = "created"
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class WaveRefundStatus(str, enum.Enum):
    """Refund status as reported by Wave."""
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


PAYMENT_STATUS_MAPPING = {
    WavePaymentStatus.CREATED: AttemptStatus.PENDING,
    WavePaymentStatus.PENDING: AttemptStatus.PENDING,
    WavePaymentStatus.COMPLETED: AttemptStatus.CHARGED,
    WavePaymentStatus.FAILED: AttemptStatus.FAILURE,
    WavePaymentStatus.CANCELLED: AttemptStatus.VOIDED,
}

REFUND_STATUS_MAPPING = {
    WaveRefundStatus.PROCESSING: RefundStatus.PENDING,
    WaveRefundStatus.COMPLETED: RefundStatus.SUCCESS,
    WaveRefundStatus.FAILED: RefundStatus.FAILURE,
    WaveRefundStatus.CANCELLED: RefundStatus.FAILURE,
}


def map_payment_status(status: WavePaymentStatus) -> AttemptStatus:
    """Map a Wave payment status to the canonical attempt status."""
    return PAYMENT_STATUS_MAPPING[status]


def map_refund_status(status: WaveRefundStatus) -> RefundStatus:
    """Map a Wave refund status to the canonical refund status."""
    return REFUND_STATUS_MAPPING[status]
