"""Example config for `oats-generator import --config examples/oats-generator.config.py`."""

from oats_generator.shared.naming import to_camel_case

HTTP_IMPORT = """
import { HttpClient, RequestConfig } from './Http'
export const clientInstance = new HttpClient();
"""

SWR_IMPORT = """
import useSWR from "swr";
import { fetcherFn, ConfigInterface } from "swr/dist/types";
"""


def http_generator(component):
    """Emit a typed call on a shared HttpClient for each operation."""
    name = to_camel_case(component.component_name)
    params = f"{component.params_types}, " if component.params_types else ""
    response = component.type_names.response
    if component.verb == "get":
        return f"""
export const {name} = ({params}params?: {component.type_names.query}, config?: RequestConfig) =>
  clientInstance.get<{response}>(`{component.route}`, params, config);
"""
    return f"""
export const {name} = ({params}body: {component.type_names.body}, config?: RequestConfig) =>
  clientInstance.{component.verb}<{response}>(`{component.route}`, body, config);
"""


def swr_generator(component):
    """Emit an SWR hook for each GET operation."""
    if component.verb != "get":
        return ""
    params = f"{component.params_types}, " if component.params_types else ""
    return f"""
export const use{component.component_name} = <Data = {component.type_names.response}, Error = any>({params}fetcher?: fetcherFn<Data>, config?: ConfigInterface<Data, Error>) =>
  useSWR<Data, Error>(`{component.route}`, fetcher, config);
"""


def operation_name(verb, route):
    """Build `getPetsByPetId`-style names from the verb and route."""
    words = route.replace("/api/v1/", "").strip("/").split("/")
    entities = [word for word in words if "{" not in word]
    operators = [to_camel_case(f"by {word.strip('{}')}") for word in words if "{" in word]
    return to_camel_case(" ".join([verb, *entities, *operators]))


CONFIG = {
    "petstore-file": {
        "file": "petstore.yaml",
        "output": "petstoreFromFileSpecWithConfig.ts",
    },
    "petstore-github": {
        "github": "OAI:OpenAPI-Specification:main:examples/v3.0/petstore.yaml",
        "output": "petstoreFromGithubSpecWithConfig.ts",
        "custom_import": "/* a custom import */",
    },
    "petstore-custom-fetch": {
        "file": "petstore.yaml",
        "output": "petstoreFromFileSpecWithCustomFetch.ts",
        "custom_import": HTTP_IMPORT,
        "custom_generator": http_generator,
    },
    "petstore-custom-operation": {
        "file": "petstore.yaml",
        "output": "petstoreFromFileSpecWithCustomOperation.ts",
        "custom_import": HTTP_IMPORT,
        "custom_generator": http_generator,
        "custom_operation_name_generator": operation_name,
        "transformer": lambda spec: {
            **spec,
            "paths": {
                route: {
                    verb: {k: v for k, v in op.items() if k != "operationId"}
                    if isinstance(op, dict) else op
                    for verb, op in item.items()
                }
                for route, item in spec.get("paths", {}).items()
            },
        },
    },
    "petstore-swr": {
        "file": "petstore.yaml",
        "output": "petstoreSwr.ts",
        "custom_import": SWR_IMPORT,
        "custom_generator": swr_generator,
    },
}
