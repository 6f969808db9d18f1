class Templates:
    """Шаблоны для генерации TypeScript файлов"""

    module_import = "import * as {name} from './{name}';"

    empty_module = "export { }"

    enum = """export enum {name} {{
{members}
}}

export namespace {name} {{
    export function getDescription(enumValue: {name}) {{
        switch (enumValue) {{
{description_cases}
        }}
    }}

    export function getShortName(enumValue: {name}) {{
        switch (enumValue) {{
{short_name_cases}
        }}
    }}

    export function allEnums() {{
        return [{all_values}];
    }}
}}"""

    enum_member = "    {name} = {value},"

    enum_case = "            case {enum}.{name}: return '{text}';"

    http_request = """const response = await axios.request({{
    url: {url},
    method: '{method}',
    params: {{ {params} }},
    data: {data}
}});

return response.data"""


templates = Templates()
