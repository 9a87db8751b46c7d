"""
Resource wrappers mirroring the REST endpoints.

Each method returns the decoded response envelope.
"""


class _Resource:
    def __init__(self, client):
        self.client = client


class AuthAPI(_Resource):
    def _remember(self, envelope):
        if envelope and envelope.get("token"):
            self.client.store.save(envelope["token"], envelope.get("user"))
        return envelope

    def register(self, data):
        return self._remember(self.client.post("/api/auth/register", data))

    def login(self, email, password):
        return self._remember(
            self.client.post("/api/auth/login", {"email": email, "password": password})
        )

    def oauth(self, provider, access_token):
        return self._remember(
            self.client.post(f"/api/auth/oauth/{provider}", {"accessToken": access_token})
        )

    def refresh(self):
        return self._remember(self.client.post("/api/auth/refresh-token"))

    def forgot_password(self, email):
        return self.client.post("/api/auth/forgot-password", {"email": email})

    def reset_password(self, token, new_password):
        return self.client.post(
            "/api/auth/reset-password", {"token": token, "newPassword": new_password}
        )

    def verify_email(self, token):
        return self.client.post("/api/auth/verify-email", {"token": token})

    def logout(self):
        self.client.store.clear()


class UserAPI(_Resource):
    def get_profile(self):
        return self.client.get("/api/users/profile")

    def update_profile(self, data):
        return self.client.put("/api/users/profile", data)

    def update_provider_profile(self, data):
        return self.client.put("/api/users/provider-profile", data)

    def get_stats(self):
        return self.client.get("/api/users/stats")

    def delete_account(self):
        return self.client.delete("/api/users/account")


class ServicesAPI(_Resource):
    def get_all(self, **params):
        return self.client.get("/api/services", params=params or None)

    def get_by_id(self, service_id, lang=None):
        return self.client.get(f"/api/services/{service_id}", params={"lang": lang} if lang else None)

    def get_categories(self):
        return self.client.get("/api/services/categories")

    def create(self, data):
        return self.client.post("/api/services", data)

    def update(self, service_id, data):
        return self.client.put(f"/api/services/{service_id}", data)

    def delete(self, service_id):
        return self.client.delete(f"/api/services/{service_id}")


class BookingsAPI(_Resource):
    def create(self, data):
        return self.client.post("/api/bookings", data)

    def get_user_bookings(self, **params):
        return self.client.get("/api/bookings/user", params=params or None)

    def get_provider_bookings(self, **params):
        return self.client.get("/api/bookings/provider", params=params or None)

    def get_by_id(self, booking_id):
        return self.client.get(f"/api/bookings/user/{booking_id}")

    def get_provider_booking(self, booking_id):
        return self.client.get(f"/api/bookings/provider/{booking_id}")

    def update_status(self, booking_id, status, completion_notes=None):
        data = {"status": status}
        if completion_notes is not None:
            data["completionNotes"] = completion_notes
        return self.client.put(f"/api/bookings/provider/{booking_id}/status", data)

    def cancel(self, booking_id, reason=None):
        data = {"reason": reason} if reason else {}
        return self.client.put(f"/api/bookings/user/{booking_id}/cancel", data)


class ReviewsAPI(_Resource):
    def create(self, data):
        return self.client.post("/api/reviews", data)

    def get_service_reviews(self, service_id, **params):
        return self.client.get(f"/api/reviews/service/{service_id}", params=params or None)

    def get_provider_reviews(self, provider_id, **params):
        return self.client.get(f"/api/reviews/provider/{provider_id}", params=params or None)

    def update(self, review_id, data):
        return self.client.put(f"/api/reviews/{review_id}", data)

    def delete(self, review_id):
        return self.client.delete(f"/api/reviews/{review_id}")

    def respond(self, review_id, response):
        return self.client.post(f"/api/reviews/{review_id}/respond", {"response": response})


class MessagesAPI(_Resource):
    def send(self, data):
        return self.client.post("/api/messages", data)

    def get_conversations(self):
        return self.client.get("/api/messages/conversations")

    def get_conversation(self, other_user_id, booking_id=None, **params):
        params["otherUserId"] = other_user_id
        if booking_id:
            params["bookingId"] = booking_id
        return self.client.get("/api/messages/conversation", params=params)

    def mark_as_read(self, message_ids):
        return self.client.put("/api/messages/read", {"messageIds": list(message_ids)})

    def delete(self, message_id):
        return self.client.delete(f"/api/messages/{message_id}")


class NotificationsAPI(_Resource):
    def get_all(self, **params):
        return self.client.get("/api/notifications", params=params or None)

    def unread_count(self):
        return self.client.get("/api/notifications/unread-count")

    def mark_read(self, notification_id):
        return self.client.patch(f"/api/notifications/{notification_id}/read")

    def mark_all_read(self):
        return self.client.patch("/api/notifications/mark-all-read")

    def delete(self, notification_id):
        return self.client.delete(f"/api/notifications/{notification_id}")
