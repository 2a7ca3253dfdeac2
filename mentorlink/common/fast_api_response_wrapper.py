from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from http import HTTPStatus


def api_response(
    message: str,
    success: bool = True,
    data: dict | list | None = None,
    status_code: HTTPStatus = HTTPStatus.OK,
) -> JSONResponse:
    """
    Generate the standard JSON envelope returned by every endpoint.

    The body always has the shape ``{"success": ..., "message": ..., "data": ...}``.
    Pydantic DTOs inside ``data`` are serialized by alias (camelCase).

    Args:
        message (str): A descriptive message explaining the result of the API call.
        success (bool): Whether the API call succeeded (True) or failed (False).
        data (dict | list | None): Optional payload to include in the response body.
        status_code (HTTPStatus): The HTTP status code for the response.
                                  Defaults to HTTPStatus.OK (200).

    Returns:
        JSONResponse: A FastAPI/Starlette JSONResponse object.

    Example:
        return api_response(
            message="Preference saved.",
            data={"selection": selection_dto},
            status_code=HTTPStatus.OK,
        )
    """

    response_body = {
        "success": success,
        "message": message,
        "data": data,
    }
    serialized_body = jsonable_encoder(response_body, by_alias=True)

    return JSONResponse(
        status_code=status_code.value,
        content=serialized_body,
    )
