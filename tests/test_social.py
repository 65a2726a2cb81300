import unittest
import uuid
from cypher.models.comment import Comment
from cypher.models.notification import Notification, NotificationType
from cypher.models.track_like import TrackLike
from tests.base import ApiTestCase


class SocialTestCase(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.owner_id, self.owner_token = self.create_user('c@x.com', 'creator', 'Nova')
        self.track = self.create_track(self.owner_token, title='Nachtfahrt')
        self.fan_id, self.fan_token = self.create_user('fan@x.com')


class TestLikes(SocialTestCase):

    def like(self, token):
        return self.client.post(f"/api/tracks/{self.track['id']}/like", headers=self.auth(token))

    def likes(self, token):
        return self.client.get(f"/api/tracks/{self.track['id']}/likes", headers=self.auth(token)).get_json()

    def test_toggle(self):
        before = self.likes(self.fan_token)
        self.assertEqual(before['likeCount'], 0)
        self.assertFalse(before['userLiked'])

        response = self.like(self.fan_token)
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body['message'], 'Track geliked')
        self.assertEqual(body['likeCount'], 1)
        self.assertTrue(body['userLiked'])

        response = self.like(self.fan_token)
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body['message'], 'Like entfernt')
        self.assertEqual(body['likeCount'], 0)
        self.assertFalse(body['userLiked'])

        self.assertEqual(self.likes(self.fan_token), before)

    def test_likes_are_per_user(self):
        self.like(self.fan_token)
        self.like(self.owner_token)
        self.assertEqual(self.likes(self.fan_token)['likeCount'], 2)

        self.like(self.fan_token)
        state = self.likes(self.owner_token)
        self.assertEqual(state['likeCount'], 1)
        self.assertTrue(state['userLiked'])

    def test_like_unknown_track(self):
        response = self.client.post(f"/api/tracks/{uuid.uuid4()}/like", headers=self.auth(self.fan_token))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(TrackLike.query.count(), 0)

    def test_like_notifies_owner(self):
        self.like(self.fan_token)
        notification = Notification.query.one()
        self.assertEqual(notification.type, NotificationType.track_liked)
        self.assertEqual(str(notification.recipient_id), self.owner_id)
        self.assertEqual(str(notification.sender_id), self.fan_id)
        self.assertEqual(str(notification.track_id), self.track['id'])
        self.assertIn('Nachtfahrt', notification.message)

    def test_unlike_does_not_notify(self):
        self.like(self.fan_token)
        self.like(self.fan_token)
        self.assertEqual(Notification.query.count(), 1)

    def test_relike_does_not_stack_unread_notifications(self):
        for _ in range(3):
            self.like(self.fan_token)
        self.assertEqual(Notification.query.count(), 1)
        self.assertTrue(self.likes(self.fan_token)['userLiked'])

    def test_relike_after_read_notifies_again(self):
        self.like(self.fan_token)
        Notification.query.one().mark_read()
        self.like(self.fan_token)
        self.like(self.fan_token)
        self.assertEqual(Notification.query.filter_by(is_read=False).count(), 1)
        self.assertEqual(Notification.query.count(), 2)

    def test_own_like_does_not_notify(self):
        self.like(self.owner_token)
        self.assertEqual(Notification.query.count(), 0)

    def test_model_toggle(self):
        track_id, user_id = uuid.UUID(self.track['id']), uuid.UUID(self.fan_id)
        self.assertTrue(TrackLike.toggle(track_id, user_id))
        self.assertTrue(TrackLike.exists(track_id, user_id))
        self.assertFalse(TrackLike.toggle(track_id, user_id))
        self.assertEqual(TrackLike.count_for(track_id), 0)


class TestComments(SocialTestCase):

    def comment(self, token, text):
        return self.client.post(
            f"/api/tracks/{self.track['id']}/comments",
            json={'text': text},
            headers=self.auth(token)
        )

    def test_post_and_list(self):
        response = self.comment(self.fan_token, 'Starker Track!')
        self.assertEqual(response.status_code, 201)
        comment = response.get_json()['comment']
        self.assertEqual(comment['comment_text'], 'Starker Track!')
        self.assertEqual(comment['email'], 'fan@x.com')

        self.comment(self.owner_token, 'Danke!')
        response = self.client.get(f"/api/tracks/{self.track['id']}/comments", headers=self.auth(self.fan_token))
        self.assertEqual(response.status_code, 200)
        comments = response.get_json()['comments']
        self.assertEqual([c['comment_text'] for c in comments], ['Starker Track!', 'Danke!'])
        self.assertEqual(comments[1]['artist_name'], 'Nova')

    def test_empty_comment(self):
        self.assertEqual(self.comment(self.fan_token, '   ').status_code, 400)
        self.assertEqual(Comment.query.count(), 0)

    def test_non_text_comment(self):
        self.assertEqual(self.comment(self.fan_token, 5).status_code, 400)
        self.assertEqual(Comment.query.count(), 0)

    def test_comment_on_unknown_track(self):
        response = self.client.post(
            f"/api/tracks/{uuid.uuid4()}/comments",
            json={'text': 'Hallo'},
            headers=self.auth(self.fan_token)
        )
        self.assertEqual(response.status_code, 404)

    def test_comment_notifies_owner_only_for_others(self):
        self.comment(self.fan_token, 'Hallo')
        self.comment(self.owner_token, 'Selbst')
        notification = Notification.query.one()
        self.assertEqual(notification.type, NotificationType.new_comment)
        self.assertEqual(str(notification.recipient_id), self.owner_id)

    def test_comments_go_with_the_track(self):
        self.comment(self.fan_token, 'Hallo')
        self.client.delete(f"/api/tracks/{self.track['id']}", headers=self.auth(self.owner_token))
        self.assertEqual(Comment.query.count(), 0)
        notification = Notification.query.one()
        self.assertIsNone(notification.track_id)


class TestNotifications(SocialTestCase):

    def setUp(self):
        super().setUp()
        self.client.post(f"/api/tracks/{self.track['id']}/like", headers=self.auth(self.fan_token))

    def test_list(self):
        response = self.client.get('/api/notifications', headers=self.auth(self.owner_token))
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body['unread'], 1)
        notification = body['notifications'][0]
        self.assertEqual(notification['type'], 'track_liked')
        self.assertEqual(notification['sender_email'], 'fan@x.com')
        self.assertFalse(notification['is_read'])

        response = self.client.get('/api/notifications', headers=self.auth(self.fan_token))
        self.assertEqual(response.get_json()['notifications'], [])

    def test_mark_read(self):
        notification_id = Notification.query.one().id
        response = self.client.put(f'/api/notifications/{notification_id}/read', headers=self.auth(self.owner_token))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()['notification']['is_read'])
        self.assertTrue(Notification.query.one().is_read)

    def test_only_recipient_marks_read(self):
        notification_id = Notification.query.one().id
        response = self.client.put(f'/api/notifications/{notification_id}/read', headers=self.auth(self.fan_token))
        self.assertEqual(response.status_code, 404)
        self.assertFalse(Notification.query.one().is_read)


if __name__ == '__main__':
    unittest.main()
