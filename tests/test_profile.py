import io
import unittest
from flask_jwt_extended import decode_token
from cypher.models.user import User, UserRole
from tests.base import ApiTestCase


class TestProfile(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.user_id, self.token = self.create_user('c@x.com', 'creator', 'Nova')

    def update(self, data, token=None):
        return self.client.put(
            '/api/profile',
            data=data,
            headers=self.auth(token or self.token),
            content_type='multipart/form-data'
        )

    def test_get_profile(self):
        response = self.client.get('/api/profile', headers=self.auth(self.token))
        self.assertEqual(response.status_code, 200)
        profile = response.get_json()['profile']
        self.assertEqual(profile['email'], 'c@x.com')
        self.assertEqual(profile['artist_name'], 'Nova')
        self.assertIsNone(profile['profile_picture_url'])

    def test_partial_update_keeps_other_fields(self):
        response = self.update({'bio': 'Synthwave aus Köln'})
        self.assertEqual(response.status_code, 200)
        profile = response.get_json()['profile']
        self.assertEqual(profile['bio'], 'Synthwave aus Köln')
        self.assertEqual(profile['artist_name'], 'Nova')

    def test_json_update(self):
        response = self.client.put('/api/profile', json={'artistName': 'Nova Nine'}, headers=self.auth(self.token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(User.find_by_email('c@x.com').artist_name, 'Nova Nine')

    def test_creator_keeps_artist_name(self):
        response = self.update({'artistName': ''})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(User.find_by_email('c@x.com').artist_name, 'Nova')

    def test_artist_name_taken(self):
        self.create_user('d@x.com', 'creator', 'Rex')
        response = self.update({'artistName': 'Rex'})
        self.assertEqual(response.status_code, 409)

    def test_profile_picture_replacement(self):
        response = self.update({'profilePicture': (io.BytesIO(b'img'), 'me.png')})
        self.assertEqual(response.status_code, 200)
        first_key = User.find_by_email('c@x.com').profile_picture_key
        self.assertTrue(first_key.startswith('profile-pic-'))
        self.assertIn(first_key, response.get_json()['profile']['profile_picture_url'])
        self.s3.delete_object.assert_not_called()

        self.update({'profilePicture': (io.BytesIO(b'img2'), 'me2.jpg')})
        second_key = User.find_by_email('c@x.com').profile_picture_key
        self.assertNotEqual(first_key, second_key)
        self.assertEqual(self.deleted_keys(), [first_key])

    def test_non_text_fields(self):
        for payload in ({'bio': 5}, {'artistName': 42}):
            response = self.client.put('/api/profile', json=payload, headers=self.auth(self.token))
            self.assertEqual(response.status_code, 400, payload)
        user = User.find_by_email('c@x.com')
        self.assertEqual(user.artist_name, 'Nova')
        self.assertIsNone(user.bio)

    def test_profile_picture_type(self):
        response = self.update({'profilePicture': (io.BytesIO(b'x'), 'me.txt')})
        self.assertEqual(response.status_code, 400)
        self.s3.upload_fileobj.assert_not_called()


class TestRoleChange(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.user_id, self.token = self.create_user('l@x.com')

    def change_role(self, payload, token=None):
        return self.client.put('/api/user/role', json=payload, headers=self.auth(token or self.token))

    def test_becoming_creator_needs_artist_name(self):
        response = self.change_role({'newRole': 'creator'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(User.find_by_email('l@x.com').role, UserRole.listener)

    def test_invalid_role(self):
        self.assertEqual(self.change_role({'newRole': 'admin'}).status_code, 400)
        self.assertEqual(self.change_role({'newRole': 1}).status_code, 400)
        self.assertEqual(self.change_role({}).status_code, 400)

    def test_new_token_unlocks_upload(self):
        self.assertEqual(self.upload_track(self.token).status_code, 403)

        response = self.change_role({'newRole': 'creator', 'artistName': 'Late Bloomer'})
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body['user']['role'], 'creator')
        self.assertEqual(decode_token(body['token'])['role'], 'creator')

        self.assertEqual(self.upload_track(body['token']).status_code, 201)

    def test_existing_tracks_survive_downgrade(self):
        _, token = self.create_user('c@x.com', 'creator', 'Nova')
        track = self.create_track(token)

        response = self.change_role({'newRole': 'listener'}, token)
        self.assertEqual(response.status_code, 200)
        new_token = response.get_json()['token']

        response = self.client.get(f"/api/tracks/{track['id']}", headers=self.auth(new_token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.upload_track(new_token).status_code, 403)


if __name__ == '__main__':
    unittest.main()
