from gptkit.models import (
    FineTuneModelDeleteResponse,
    Model,
    ModelsList,
    delete_fine_tune_model,
    get_model,
    list_models,
)

FINE_TUNE_MODEL_ID = "fine-tune-model-id"


def test_list_models_call():
    call = list_models()
    assert (call.method, call.target()) == ("GET", "/models")
    assert call.body is None
    assert call.parse({"data": None}) == ModelsList()


def test_list_models_parse_with_permissions():
    listing = ModelsList.from_dict(
        {
            "data": [
                {
                    "id": "text-davinci-003",
                    "object": "model",
                    "created": 1669599635,
                    "owned_by": "openai-internal",
                    "permission": [
                        {
                            "id": "modelperm-1",
                            "created": 1690864883,
                            "allow_sampling": True,
                            "allow_view": True,
                            "organization": "*",
                            "group": None,
                            "is_blocking": False,
                        }
                    ],
                    "root": "text-davinci-003",
                    "parent": None,
                }
            ]
        }
    )
    model = listing.models[0]
    assert model.id == "text-davinci-003"
    assert model.created_at == 1669599635
    assert model.parent == ""
    permission = model.permission[0]
    assert permission.created_at == 1690864883
    assert permission.allow_sampling is True
    assert permission.allow_fine_tuning is False
    assert permission.organization == "*"


def test_get_model_call():
    call = get_model("text-davinci-003")
    assert (call.method, call.target()) == ("GET", "/models/text-davinci-003")
    assert call.parse({}) == Model()


def test_delete_fine_tune_model_call():
    call = delete_fine_tune_model(FINE_TUNE_MODEL_ID)
    assert (call.method, call.target()) == ("DELETE", f"/models/{FINE_TUNE_MODEL_ID}")
    result = call.parse({"id": FINE_TUNE_MODEL_ID, "object": "model", "deleted": True})
    assert result == FineTuneModelDeleteResponse(
        id=FINE_TUNE_MODEL_ID, object="model", deleted=True
    )