from models.insights import InsightFeedback


def insert_feedback(conn, feedback: InsightFeedback):
    conn.execute(
        """
        INSERT INTO insight_feedback (id, user_id, insight_id, value, comment, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (feedback.id, feedback.user_id, feedback.insight_id, feedback.value,
         feedback.comment, feedback.created_at)
    )