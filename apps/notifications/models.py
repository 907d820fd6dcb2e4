from django.db import models
import uuid


class NotificationType(models.TextChoices):
    REVENUE_SHARE = 'revenue_share', 'Revenue share'
    INVESTMENT = 'investment', 'Investment'


class Notification(models.Model):
    """In-app message for one user. Rows are never rewritten except `read`."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notifications'
    )

    type = models.CharField(max_length=30, choices=NotificationType.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    link = models.CharField(max_length=200, blank=True)
    read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['user', 'read'], name='notifications_user_read_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} -> {self.user.email}"
