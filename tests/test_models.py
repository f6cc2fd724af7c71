"""Tests for the result and wire models"""
import dataclasses
import datetime
import json
import unittest
import uuid

from mc_oauth import CompleteLoginResult, MinecraftProfile, TextureState, XboxLiveAuthResponse
from mc_oauth.models import MinecraftAuthRequest, XboxLiveAuthRequest
from tests.fixtures import PROFILE, PROFILE_ID, XBL_TOKEN


def make_result(**overrides):
    profile = MinecraftProfile.model_validate(PROFILE)
    result = CompleteLoginResult.from_profile(profile, "mc-access-token", "ms-refresh-token")
    return dataclasses.replace(result, **overrides) if overrides else result


class TestCompleteLoginResult(unittest.TestCase):

    def test_from_profile_copies_textures(self):
        result = make_result()
        self.assertEqual(result.profile_id, PROFILE_ID)
        self.assertEqual(result.skins[0].alias, "STEVE")
        self.assertEqual(result.capes[0].state, TextureState.INACTIVE)
        self.assertEqual(result.issued_at.tzinfo, datetime.timezone.utc)

    def test_profile_without_textures(self):
        profile = MinecraftProfile(id=PROFILE_ID, name="A_Pi")
        result = CompleteLoginResult.from_profile(profile, "a", "r")
        self.assertEqual(result.skins, ())
        self.assertEqual(result.capes, ())
        self.assertIsNone(result.active_skin)

    def test_profile_uuid_accepts_undashed_id(self):
        result = make_result()
        self.assertEqual(result.profile_uuid, uuid.UUID("c4bb2799-e166-4b6f-970c-a96c9e58f2d3"))

    def test_active_skin_skips_inactive(self):
        result = make_result()
        self.assertEqual(result.active_skin.alias, "STEVE")

        inactive = result.skins[0].model_copy(update={"state": TextureState.INACTIVE})
        self.assertIsNone(make_result(skins=(inactive,)).active_skin)

    def test_is_immutable(self):
        result = make_result()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            result.access_token = "other"

    def test_dict_form_is_json_safe_and_reloadable(self):
        result = make_result()
        data = json.loads(json.dumps(result.to_dict()))

        self.assertEqual(data["skins"][0]["state"], "ACTIVE")
        self.assertEqual(CompleteLoginResult.from_dict(data), result)

    def test_from_dict_tolerates_missing_textures(self):
        data = make_result().to_dict()
        del data["skins"]
        del data["capes"]
        loaded = CompleteLoginResult.from_dict(data)
        self.assertEqual(loaded.skins, ())
        self.assertEqual(loaded.capes, ())


class TestWireModels(unittest.TestCase):

    def test_xbox_live_response_user_hash(self):
        response = XboxLiveAuthResponse.model_validate(XBL_TOKEN)
        self.assertEqual(response.token, "xbl-token")
        self.assertEqual(response.user_hash, "1234567890")

    def test_request_models_dump_wire_names(self):
        body = XboxLiveAuthRequest.for_access_token("tok").model_dump(by_alias=True)
        self.assertEqual(body["Properties"]["RpsTicket"], "d=tok")

        identity = MinecraftAuthRequest.from_xsts("uhs", "xsts").model_dump()
        self.assertEqual(identity, {"identityToken": "XBL3.0 x=uhs;xsts"})


if __name__ == '__main__':
    unittest.main()
